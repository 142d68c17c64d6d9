"""Error conventions used by the epoch driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from ..core.activations import Activation
from ..core.errors import InvalidConfiguration
from ..core.types import Array

ErrorFn = Callable[[Array, Array], float]
DeltaFn = Callable[[Array, Array, Activation], Array]


@dataclass(frozen=True)
class Loss:
    """Loss wrapper returning the pattern error and the output deltas.

    Deltas follow the sign convention of the delta rule: they point *down*
    the error surface, so weight updates add them.
    """

    name: str
    error_fn: ErrorFn
    delta_fn: DeltaFn
    requires_output: str | None = None

    def error(self, output: Array, targets: Array) -> float:
        return self.error_fn(output, targets)

    def output_deltas(self, output: Array, targets: Array, activation: Activation) -> Array:
        return self.delta_fn(output, targets, activation)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, loss: Loss) -> None:
        self._registry[loss.name] = loss

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: str, *, output_activation: str) -> Loss:
        if name not in self._registry:
            available = ", ".join(self.names())
            raise InvalidConfiguration(f"Unknown loss {name!r}. Available losses: {available}")
        loss = self._registry[name]
        if loss.requires_output is not None and loss.requires_output != output_activation:
            raise InvalidConfiguration(
                f"Loss {name!r} requires {loss.requires_output!r} output units, "
                f"got {output_activation!r}"
            )
        return loss


REGISTRY = LossRegistry()


def _sse(output: Array, targets: Array) -> float:
    diff = targets - output
    return float(0.5 * np.dot(diff, diff))


def _sse_deltas(output: Array, targets: Array, activation: Activation) -> Array:
    return (targets - output) * activation.deriv(output)


def _cross_entropy(output: Array, targets: Array) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = targets * np.log(output) + (1.0 - targets) * np.log(1.0 - output)
    # 0 * log(0) is taken as 0 when a target sits exactly on a saturated output.
    terms = np.where((targets == output), 0.0, terms)
    return float(-np.sum(terms))


def _cross_entropy_deltas(output: Array, targets: Array, activation: Activation) -> Array:
    return targets - output


REGISTRY.register(Loss("sse", _sse, _sse_deltas))
REGISTRY.register(Loss("cross_entropy", _cross_entropy, _cross_entropy_deltas, "logistic"))

__all__ = ["Loss", "LossRegistry", "REGISTRY"]
