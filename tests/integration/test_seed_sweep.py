import subprocess, sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def test_seed_sweep_runs_quickly(tmp_path):
    out = tmp_path / "sweep"
    subprocess.check_call(
        [
            sys.executable,
            str(ROOT / "scripts" / "seed_sweep.py"),
            "--seeds", "0", "1",
            "--max-epochs", "20",
            "--out", str(out),
        ]
    )
    md = (out / "seed_sweep.md").read_text(encoding="utf-8")
    assert "| xor |" in md
    assert (out / "seed_sweep.csv").exists()
