import json

import pytest

from cli.main import EXIT_EXHAUSTED, EXIT_FAILED, main


def test_cli_xor_preset_reports_table(tmp_path, capsys):
    metrics = tmp_path / "metrics.jsonl"
    code = main(["--preset", "xor", "--seed", "3", "--max-epochs", "50", "--jsonl", str(metrics)])
    out = capsys.readouterr().out
    assert code == EXIT_EXHAUSTED
    assert "STOPPED!" in out
    assert "NETWORK DATA - EPOCH 49" in out
    assert "Expected1\tReal1" in out
    assert "Seed: 3" in out
    records = [json.loads(line) for line in metrics.read_text().splitlines()]
    assert [r["epoch"] for r in records] == [0, 49]


def test_cli_divergent_override_exits_with_failure(tmp_path, capsys):
    override = tmp_path / "override.json"
    override.write_text(
        json.dumps(
            {
                "model": {"output_activation": "linear"},
                "train": {"learning_rate_ih": 1000.0, "learning_rate_ho": 1000.0},
            }
        )
    )
    code = main(["--preset", "xor", "--seed", "0", "--max-epochs", "5000", "--config", str(override)])
    captured = capsys.readouterr()
    assert code == EXIT_FAILED
    assert "Non-finite" in captured.err


def test_cli_invalid_config_exits_with_failure(tmp_path, capsys):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"train": {"momentum": 1.5}}))
    code = main(["--preset", "xor", "--config", str(override)])
    assert code == EXIT_FAILED
    assert "momentum" in capsys.readouterr().err


def test_cli_lists_presets_and_datasets(capsys):
    assert main(["--list-presets"]) == 0
    assert "xor" in capsys.readouterr().out.split()
    assert main(["--list-datasets"]) == 0
    assert "parity" in capsys.readouterr().out.split()


def test_cli_dump_config(tmp_path, capsys):
    dump = tmp_path / "resolved.json"
    main(["--preset", "xor", "--seed", "1", "--max-epochs", "2", "--dump-config", str(dump)])
    resolved = json.loads(dump.read_text())
    assert resolved["train"]["seed"] == 1
    assert resolved["train"]["max_epochs"] == 2
    network = resolved["network"]
    assert network["seed"] == 1
    assert network["max_epochs"] == 2
    assert network["hidden_units"] == 4
    assert network["loss"] == "sse"


def test_cli_unseeded_run_records_wall_clock_seed(tmp_path, capsys):
    metrics = tmp_path / "metrics.jsonl"
    code = main(["--preset", "xor", "--max-epochs", "3", "--jsonl", str(metrics)])
    out = capsys.readouterr().out
    assert code == EXIT_EXHAUSTED
    seed_line = [line for line in out.splitlines() if line.startswith("Seed: ")][-1]
    seed = int(seed_line.split(": ", 1)[1])
    records = [json.loads(line) for line in metrics.read_text().splitlines()]
    assert records
    assert all(r["seed"] == seed for r in records)


@pytest.mark.parametrize(
    "filename, content",
    [
        ("missing.json", None),
        ("broken.json", '{"train": {"seed": 1'),
        ("list.json", "[1, 2]"),
        ("override.toml", "seed = 1"),
        ("train_list.json", json.dumps({"train": [1, 2]})),
        ("bad_option.json", json.dumps({"data": {"name": "xor", "options": {"bogus": 1}}})),
        ("no_inputs.json", json.dumps({"data": {"name": "parity", "options": {"n_inputs": 0}}})),
        ("data_string.json", json.dumps({"data": "xor"})),
    ],
)
def test_cli_bad_config_exits_with_failure(tmp_path, capsys, filename, content):
    path = tmp_path / filename
    if content is not None:
        path.write_text(content)
    code = main(["--preset", "xor", "--seed", "0", "--max-epochs", "2", "--config", str(path)])
    captured = capsys.readouterr()
    assert code == EXIT_FAILED
    assert captured.err.startswith("error: ")
    assert "Epoch" not in captured.out


def test_cli_bad_config_with_seed_override(tmp_path, capsys):
    path = tmp_path / "train_list.json"
    path.write_text(json.dumps({"train": [1, 2]}))
    code = main(["--preset", "xor", "--config", str(path)])
    assert code == EXIT_FAILED
    assert "train" in capsys.readouterr().err
