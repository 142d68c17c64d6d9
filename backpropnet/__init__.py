"""backpropnet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import (
    BackpropNetError,
    DimensionMismatch,
    InvalidConfiguration,
    NumericDivergence,
)
from .core.types import TelemetryEvent, TerminalState, TrainingResult
from .network import Network, configure
from .training.config import NetworkConfig
from .training.pipelines import load_preset, presets, run_pipeline

__all__ = [
    "BackpropNetError",
    "DimensionMismatch",
    "InvalidConfiguration",
    "Network",
    "NetworkConfig",
    "NumericDivergence",
    "TelemetryEvent",
    "TerminalState",
    "TrainingResult",
    "activations",
    "configure",
    "load_preset",
    "presets",
    "run_pipeline",
    "types",
]
