"""Command line entry point for backpropnet training runs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from backpropnet.core.errors import BackpropNetError, InvalidConfiguration
from backpropnet.core.types import TerminalState
from backpropnet.data import available as available_datasets
from backpropnet.reporting import ConsoleSink, CsvSink, JsonlSink, PlotAdapter, format_network_table
from backpropnet.training import pipelines

EXIT_CONVERGED = 0
EXIT_EXHAUSTED = 1
EXIT_FAILED = 2


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--dataset", help="Override the pattern set used by the run")
    parser.add_argument("--seed", type=int, help="Seed for weight initialisation and shuffling")
    parser.add_argument("--max-epochs", type=int, help="Override the epoch budget")
    parser.add_argument("--jsonl", type=Path, help="Write epoch telemetry to a JSONL file")
    parser.add_argument("--csv", type=Path, help="Write epoch telemetry to a CSV file")
    parser.add_argument("--plot", type=Path, help="Directory for an error-curve plot")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--list-datasets", action="store_true", help="List available datasets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _train_section(config: dict) -> dict:
    section = config.setdefault("train", {})
    if not isinstance(section, dict):
        raise InvalidConfiguration("Config section 'train' must be a mapping")
    return section


def resolve_config(args: argparse.Namespace) -> dict:
    config = pipelines.load_preset(args.preset)
    if args.config:
        config = pipelines.merge(config, pipelines.read_config_file(args.config))
    if args.dataset:
        config["data"] = {"name": args.dataset, "options": {}}
    if args.seed is not None:
        _train_section(config)["seed"] = int(args.seed)
    if args.max_epochs is not None:
        _train_section(config)["max_epochs"] = int(args.max_epochs)
    return json.loads(json.dumps(config))


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        return 0

    if args.list_datasets:
        for name in available_datasets():
            print(name)
        return 0

    try:
        config = resolve_config(args)
        network = pipelines.build_network(config)
    except (BackpropNetError, KeyError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    if args.dump_config:
        resolved = dict(config)
        resolved["network"] = {**network.config.to_dict(), "seed": network.seed}
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(resolved, indent=2))

    sinks: list[object] = [ConsoleSink()]
    if args.jsonl:
        sinks.append(JsonlSink(args.jsonl, seed=network.seed))
    if args.csv:
        sinks.append(CsvSink(args.csv))
    plotter = PlotAdapter(args.plot, enable_plots=True) if args.plot else None
    if plotter is not None:
        sinks.append(plotter)

    try:
        result = network.train(sinks)
    except BackpropNetError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILED
    finally:
        if plotter is not None:
            plotter.close()

    print()
    print(format_network_table(network.evaluate(), result.final_epoch))
    print(f"Seed: {result.seed}")
    if result.terminal_state is TerminalState.CONVERGED:
        return EXIT_CONVERGED
    return EXIT_EXHAUSTED


if __name__ == "__main__":
    sys.exit(main())
