"""Network and training configuration."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from ..core.activations import REGISTRY as ACTIVATIONS
from ..core.errors import InvalidConfiguration
from .losses import REGISTRY as LOSSES


@dataclass(frozen=True)
class NetworkConfig:
    """Unit counts and hyper-parameters for one training run.

    Defaults reproduce the classic 2-4-1 XOR setup: logistic units in both
    layers, sum-of-squared error, learning rate 0.5, momentum 0.9 and initial
    weights in (-0.5, 0.5).

    Attributes
    ----------
    learning_rate_ih, learning_rate_ho:
        Step sizes for the input->hidden and hidden->output weights.
    momentum:
        Fraction of the previous weight delta carried into the next one.
        Must lie in ``[0, 1)``.
    convergence_threshold:
        Training stops as soon as an epoch's accumulated error drops below
        this value.
    report_interval:
        Telemetry is emitted every ``report_interval`` epochs and always on
        termination.
    clamp_output_weights, clamp_range:
        When enabled every hidden->output weight is clipped into
        ``[-clamp_range, clamp_range]`` after each update.
    seed:
        Seed for weight initialisation and shuffling. ``None`` seeds from the
        wall clock.
    """

    input_units: int = 2
    hidden_units: int = 4
    output_units: int = 1
    hidden_activation: str = "logistic"
    output_activation: str = "logistic"
    loss: str = "sse"
    learning_rate_ih: float = 0.5
    learning_rate_ho: float = 0.5
    momentum: float = 0.9
    weight_init_bound: float = 0.5
    convergence_threshold: float = 1e-6
    max_epochs: int = 1_000_000
    report_interval: int = 1000
    clamp_output_weights: bool = False
    clamp_range: float = 5.0
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in ("input_units", "hidden_units", "output_units", "max_epochs", "report_interval"):
            _positive_int(name, getattr(self, name))
        for name in ("learning_rate_ih", "learning_rate_ho", "weight_init_bound", "clamp_range"):
            _positive_float(name, getattr(self, name))
        _positive_float("convergence_threshold", self.convergence_threshold)
        if not (isinstance(self.momentum, (int, float)) and 0.0 <= self.momentum < 1.0):
            raise InvalidConfiguration(f"momentum must lie in [0, 1), got {self.momentum!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidConfiguration(f"seed must be an integer or None, got {self.seed!r}")
        ACTIVATIONS.get(self.hidden_activation, layer="hidden")
        ACTIVATIONS.get(self.output_activation, layer="output")
        LOSSES.resolve(self.loss, output_activation=self.output_activation)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "NetworkConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise InvalidConfiguration(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )
        return cls(**dict(mapping))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")


def _positive_float(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidConfiguration(f"{name} must be positive and finite, got {value!r}")


__all__ = ["NetworkConfig"]
