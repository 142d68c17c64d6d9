from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path
from statistics import mean, pstdev


def _fmt_mu_sigma(vals):
    if not vals:
        return "n/a"
    mu = mean(vals)
    sd = pstdev(vals) if len(vals) > 1 else 0.0
    return f"{mu:.1f} ± {sd:.1f}"


def main():
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))

    from backpropnet.core.errors import NumericDivergence
    from backpropnet.training import pipelines

    ap = argparse.ArgumentParser(description="Convergence rate of a preset across seeds")
    ap.add_argument("--preset", default="xor")
    ap.add_argument("--seeds", nargs="+", type=int, default=list(range(10)))
    ap.add_argument("--max-epochs", type=int)
    ap.add_argument("--threshold", type=float)
    ap.add_argument("--out", type=str, default=".artifacts/seed_sweep")
    args = ap.parse_args()

    out = Path(args.out)
    out.mkdir(parents=True, exist_ok=True)
    runs = []
    for seed in args.seeds:
        config = pipelines.load_preset(args.preset)
        train = config.setdefault("train", {})
        train["seed"] = seed
        if args.max_epochs is not None:
            train["max_epochs"] = args.max_epochs
        if args.threshold is not None:
            train["convergence_threshold"] = args.threshold
        try:
            _, result = pipelines.run_pipeline(config)
        except NumericDivergence as exc:
            runs.append({"seed": seed, "state": "diverged", "epochs": exc.epoch, "error": None})
            continue
        runs.append(
            {
                "seed": seed,
                "state": result.terminal_state.value,
                "epochs": result.epochs,
                "error": result.final_error,
            }
        )
    (out / "results.jsonl").write_text(
        "\n".join(json.dumps(x) for x in runs), encoding="utf-8"
    )

    converged = [r for r in runs if r["state"] == "converged"]
    rate = len(converged) / len(runs) if runs else 0.0

    csv_path = out / "seed_sweep.csv"
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["seed", "state", "epochs", "error"])
        for r in runs:
            w.writerow([r["seed"], r["state"], r["epochs"], r["error"]])

    md_path = out / "seed_sweep.md"
    lines = []
    lines.append(f"### Seed sweep: `{args.preset}`")
    lines.append("")
    lines.append(f"- Seeds: `{args.seeds}`")
    lines.append("")
    lines.append("| Preset | Converged | Rate | Epochs to converge (μ±σ) |")
    lines.append("|---|---:|---:|---:|")
    lines.append(
        f"| {args.preset} | {len(converged)}/{len(runs)} | {rate:.2f} | "
        f"{_fmt_mu_sigma([r['epochs'] for r in converged])} |"
    )
    md_path.write_text("\n".join(lines), encoding="utf-8")
    print("Wrote:", csv_path, md_path)


if __name__ == "__main__":
    main()
