import csv
import json
from pathlib import Path

from backpropnet.core.types import TerminalState
from backpropnet.reporting import CsvSink, JsonlSink
from backpropnet.training import pipelines


def _config(seed: int, max_epochs: int = 30) -> dict:
    config = pipelines.load_preset("xor")
    config["train"].update(
        {
            "seed": seed,
            "max_epochs": max_epochs,
            "report_interval": 10,
            "convergence_threshold": 1e-12,
        }
    )
    return config


def test_pipeline_streams_telemetry_to_sinks(tmp_path):
    jsonl = JsonlSink(tmp_path / "metrics.jsonl", seed=3)
    csv_sink = CsvSink(tmp_path / "metrics.csv")
    network, result = pipelines.run_pipeline(_config(3), [jsonl, csv_sink])

    assert result.terminal_state is TerminalState.EXHAUSTED
    records = [json.loads(line) for line in Path(jsonl.path).read_text().splitlines() if line]
    assert [r["epoch"] for r in records] == [0, 10, 20, 29]
    assert records[-1]["state"] == "exhausted"
    assert records[-1]["error"] == result.final_error
    assert all(r["seed"] == 3 for r in records)

    with open(csv_sink.path, newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert [int(r["epoch"]) for r in rows] == [0, 10, 20, 29]
    assert rows[0]["state"] == "running"
    assert len(network.evaluate()) == 4


def test_pipeline_telemetry_is_deterministic(tmp_path):
    first = JsonlSink(tmp_path / "a.jsonl", seed=17)
    second = JsonlSink(tmp_path / "b.jsonl", seed=17)
    pipelines.run_pipeline(_config(17), [first])
    pipelines.run_pipeline(_config(17), [second])
    assert first.path.read_bytes() == second.path.read_bytes()


def test_every_preset_builds_a_valid_config():
    for name, config in pipelines.presets().items():
        cfg = pipelines.build_config(config)
        assert cfg.input_units >= 1, name


def test_pipeline_uses_dataset_options():
    config = pipelines.load_preset("parity3")
    config["train"].update({"seed": 0, "max_epochs": 3})
    network, result = pipelines.run_pipeline(config)
    assert len(network.patterns) == 8
    assert result.epochs == 3
