"""Weight storage for the single-hidden-layer perceptron."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import numpy as np

from .activations import REGISTRY as ACTIVATIONS
from .activations import Activation
from .errors import DimensionMismatch, InvalidConfiguration, NumericDivergence
from .types import Array, Deltas, ForwardState, WeightState


def _open_uniform(rng: np.random.Generator, bound: float, shape: tuple[int, int]) -> Array:
    """Draw from the open interval ``(-bound, bound)``."""

    u = rng.random(shape)
    # random() is half-open on [0, 1); redraw the single excluded endpoint.
    while not np.all(u > 0.0):
        mask = u <= 0.0
        u[mask] = rng.random(int(mask.sum()))
    return (2.0 * u - 1.0) * bound


@dataclass
class WeightStore:
    """Input->hidden and hidden->output weights plus their momentum terms.

    Row 0 of each matrix holds the weights of the bias unit, a virtual unit
    whose value is always 1.
    """

    input_units: int
    hidden_units: int
    output_units: int
    hidden_activation: str = "logistic"
    output_activation: str = "logistic"
    w_ih: Array = field(init=False, repr=False)
    w_ho: Array = field(init=False, repr=False)
    _dw_ih: Array = field(init=False, repr=False)
    _dw_ho: Array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("input_units", "hidden_units", "output_units"):
            value = getattr(self, name)
            if int(value) != value or value <= 0:
                raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
        self._hidden_fn: Activation = ACTIVATIONS.get(self.hidden_activation, layer="hidden")
        self._output_fn: Activation = ACTIVATIONS.get(self.output_activation, layer="output")
        self.w_ih = np.zeros(self.ih_shape)
        self.w_ho = np.zeros(self.ho_shape)
        self._dw_ih = np.zeros(self.ih_shape)
        self._dw_ho = np.zeros(self.ho_shape)

    @property
    def ih_shape(self) -> tuple[int, int]:
        return (self.input_units + 1, self.hidden_units)

    @property
    def ho_shape(self) -> tuple[int, int]:
        return (self.hidden_units + 1, self.output_units)

    @property
    def hidden_fn(self) -> Activation:
        return self._hidden_fn

    @property
    def output_fn(self) -> Activation:
        return self._output_fn

    def initialize(self, bound: float, rng: np.random.Generator) -> None:
        """Fill both matrices from ``(-bound, bound)`` and zero the momentum terms."""

        if not bound > 0.0:
            raise InvalidConfiguration(f"weight init bound must be positive, got {bound!r}")
        self.w_ih = _open_uniform(rng, bound, self.ih_shape)
        self.w_ho = _open_uniform(rng, bound, self.ho_shape)
        self._dw_ih = np.zeros(self.ih_shape)
        self._dw_ho = np.zeros(self.ho_shape)

    def forward(self, inputs: Array) -> ForwardState:
        hidden_sums = self.w_ih[0] + inputs @ self.w_ih[1:]
        hidden = self._hidden_fn(hidden_sums)
        output_sums = self.w_ho[0] + hidden @ self.w_ho[1:]
        output = self._output_fn(output_sums)
        return ForwardState(
            hidden_sums=hidden_sums,
            hidden=hidden,
            output_sums=output_sums,
            output=output,
        )

    def apply_update(
        self,
        inputs: Array,
        hidden: Array,
        deltas: Deltas,
        learning_rate_ih: float,
        learning_rate_ho: float,
        momentum: float,
    ) -> None:
        """Apply one momentum-augmented delta-rule step in place."""

        hidden_b = np.concatenate(([1.0], hidden))
        inputs_b = np.concatenate(([1.0], inputs))

        self._dw_ho = learning_rate_ho * np.outer(hidden_b, deltas.output) + momentum * self._dw_ho
        self.w_ho += self._dw_ho

        self._dw_ih = learning_rate_ih * np.outer(inputs_b, deltas.hidden) + momentum * self._dw_ih
        self.w_ih += self._dw_ih

    def clamp_output_weights(self, limit: float) -> None:
        np.clip(self.w_ho, -limit, limit, out=self.w_ho)

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.w_ih)) and np.all(np.isfinite(self.w_ho)))

    def state_dict(self) -> WeightState:
        return {"w_ih": self.w_ih.copy(), "w_ho": self.w_ho.copy()}

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        loaded = {}
        for key, shape in (("w_ih", self.ih_shape), ("w_ho", self.ho_shape)):
            if key not in state:
                raise KeyError(f"Missing weight {key} in state dict")
            value = np.array(state[key], dtype=np.float64)
            if value.shape != shape:
                raise DimensionMismatch(
                    f"Weight {key} has shape {value.shape}, expected {shape}"
                )
            if not np.all(np.isfinite(value)):
                raise NumericDivergence(f"Weight {key} contains non-finite values")
            loaded[key] = value
        self.w_ih = loaded["w_ih"]
        self.w_ho = loaded["w_ho"]
        self._dw_ih = np.zeros(self.ih_shape)
        self._dw_ho = np.zeros(self.ho_shape)

    def parameter_count(self) -> int:
        return int(self.w_ih.size + self.w_ho.size)


__all__ = ["WeightStore"]
