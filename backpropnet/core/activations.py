"""Activation utilities for backpropnet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from .errors import InvalidConfiguration
from .types import Array


def logistic(x: Array) -> Array:
    """Return the logistic sigmoid ``1 / (1 + exp(-x))``."""

    # exp overflows to inf for very negative sums; the result is then exactly 0.
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-x))


def logistic_deriv(y: Array) -> Array:
    """Derivative of the logistic sigmoid given its output ``y``."""

    return y * (1.0 - y)


def tanh(x: Array) -> Array:
    return np.tanh(x)


def tanh_deriv(y: Array) -> Array:
    """Derivative of tanh given its output ``y``."""

    return 1.0 - y * y


def identity(x: Array) -> Array:
    return x


def identity_deriv(y: Array) -> Array:
    return np.ones_like(y)


@dataclass(frozen=True)
class Activation:
    """A nonlinearity paired with its derivative.

    ``deriv`` takes the activation *output*, not the pre-activation sum, so the
    backward pass never needs to keep the sums around.
    """

    name: str
    fn: Callable[[Array], Array]
    deriv: Callable[[Array], Array]
    hidden_ok: bool = True

    def __call__(self, x: Array) -> Array:
        return self.fn(x)


class ActivationRegistry:
    """Central registry for activation functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Activation] = {}

    def register(self, activation: Activation) -> None:
        self._registry[activation.name] = activation

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def get(self, name: str, *, layer: str = "hidden") -> Activation:
        if name not in self._registry:
            available = ", ".join(self.names())
            raise InvalidConfiguration(
                f"Unknown activation {name!r}. Available activations: {available}"
            )
        activation = self._registry[name]
        if layer == "hidden" and not activation.hidden_ok:
            raise InvalidConfiguration(f"Activation {name!r} cannot be used for hidden units")
        return activation


REGISTRY = ActivationRegistry()
REGISTRY.register(Activation("logistic", logistic, logistic_deriv))
REGISTRY.register(Activation("tanh", tanh, tanh_deriv))
# A linear hidden layer collapses the network to a single linear map.
REGISTRY.register(Activation("linear", identity, identity_deriv, hidden_ok=False))

__all__ = [
    "Activation",
    "ActivationRegistry",
    "REGISTRY",
    "logistic",
    "logistic_deriv",
    "tanh",
    "tanh_deriv",
    "identity",
    "identity_deriv",
]
