"""Preset configurations and pipeline assembly for backpropnet."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping, Sequence, Tuple

from ..core.errors import InvalidConfiguration
from ..core.types import TrainingResult
from ..data import get_patterns
from .config import NetworkConfig

if TYPE_CHECKING:  # pragma: no cover
    from ..network import Network

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "input_units": 2,
            "hidden_units": 4,
            "output_units": 1,
            "hidden_activation": "logistic",
            "output_activation": "logistic",
            "loss": "sse",
        },
        "train": {
            "learning_rate_ih": 0.5,
            "learning_rate_ho": 0.5,
            "momentum": 0.9,
            "weight_init_bound": 0.5,
            "convergence_threshold": 1e-6,
            "max_epochs": 1_000_000,
            "report_interval": 1000,
        },
    },
    "xor-tanh-linear": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "input_units": 2,
            "hidden_units": 4,
            "output_units": 1,
            "hidden_activation": "tanh",
            "output_activation": "linear",
            "loss": "sse",
        },
        "train": {
            "learning_rate_ih": 0.07,
            "learning_rate_ho": 0.007,
            "momentum": 0.0,
            "weight_init_bound": 0.5,
            "convergence_threshold": 1e-4,
            "max_epochs": 200_000,
            "report_interval": 1000,
            "clamp_output_weights": True,
            "clamp_range": 5.0,
        },
    },
    "xor-cross-entropy": {
        "data": {"name": "xor", "options": {}},
        "model": {
            "input_units": 2,
            "hidden_units": 4,
            "output_units": 1,
            "loss": "cross_entropy",
        },
        "train": {
            "learning_rate_ih": 0.5,
            "learning_rate_ho": 0.5,
            "momentum": 0.9,
            "convergence_threshold": 1e-4,
            "max_epochs": 100_000,
            "report_interval": 1000,
        },
    },
    "parity3": {
        "data": {"name": "parity", "options": {"n_inputs": 3}},
        "model": {"input_units": 3, "hidden_units": 6, "output_units": 1},
        "train": {
            "learning_rate_ih": 0.5,
            "learning_rate_ho": 0.5,
            "momentum": 0.9,
            "convergence_threshold": 1e-4,
            "max_epochs": 200_000,
            "report_interval": 1000,
        },
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def read_config_file(path: str | Path) -> Mapping[str, object]:
    """Read a JSON or YAML mapping from ``path``."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise InvalidConfiguration(f"Unsupported config file type: {path.suffix}")
    try:
        text = path.read_text()
    except OSError as exc:
        raise InvalidConfiguration(f"Cannot read config {path}: {exc.strerror or exc}") from exc
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfiguration(f"Config {path.name} is not valid YAML: {exc}") from exc
    else:
        try:
            data = json.loads(text or "{}")
        except json.JSONDecodeError as exc:
            raise InvalidConfiguration(f"Config {path.name} is not valid JSON: {exc}") from exc

    if not isinstance(data, Mapping):
        raise InvalidConfiguration(f"Config {path.name} must decode to a mapping")
    return data


def merge(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge(merged[key], value)  # type: ignore[arg-type]
        else:
            merged[key] = value
    return merged


def build_config(config: Mapping[str, object]) -> NetworkConfig:
    """Flatten the ``model`` and ``train`` sections into a :class:`NetworkConfig`."""

    options: Dict[str, object] = {}
    for section in ("model", "train"):
        values = config.get(section, {})
        if not isinstance(values, Mapping):
            raise InvalidConfiguration(f"Config section {section!r} must be a mapping")
        overlap = set(options) & set(values)
        if overlap:
            raise InvalidConfiguration(
                f"Keys given in more than one section: {', '.join(sorted(overlap))}"
            )
        options.update(values)
    return NetworkConfig.from_mapping(options)


def build_network(config: Mapping[str, object]) -> "Network":
    """Build a network from ``config`` with its dataset already loaded."""

    from ..network import Network

    data_cfg = config.get("data", {})
    if not isinstance(data_cfg, Mapping) or "name" not in data_cfg:
        raise InvalidConfiguration("Config is missing data.name")
    options = data_cfg.get("options") or {}
    if not isinstance(options, Mapping):
        raise InvalidConfiguration("Config section 'data.options' must be a mapping")
    patterns = get_patterns(str(data_cfg["name"]), **dict(options))

    network = Network(build_config(config))
    network.load_patterns(patterns)
    return network


def run_pipeline(
    config: Mapping[str, object],
    sinks: Sequence[object] = (),
) -> Tuple["Network", TrainingResult]:
    """Build a network from ``config``, load its dataset and train it."""

    network = build_network(config)
    result = network.train(sinks)
    return network, result


__all__ = [
    "build_config",
    "build_network",
    "load_preset",
    "merge",
    "presets",
    "read_config_file",
    "run_pipeline",
]
