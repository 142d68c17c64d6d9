"""Back-propagation of output errors through the hidden layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import Array, Deltas, ForwardState
from .weights import WeightStore

if TYPE_CHECKING:  # pragma: no cover
    from ..training.losses import Loss


def hidden_deltas(store: WeightStore, hidden: Array, output_deltas: Array) -> Array:
    """Propagate ``output_deltas`` back through the hidden->output weights.

    Must be called before the pattern's weight update: it reads the weights
    that produced ``hidden``.
    """

    sum_dow = store.w_ho[1:] @ output_deltas
    return sum_dow * store.hidden_fn.deriv(hidden)


def backward(
    store: WeightStore,
    state: ForwardState,
    targets: Array,
    loss: "Loss",
) -> tuple[Deltas, float]:
    """Return the deltas for one pattern and its contribution to the epoch error."""

    delta_o = loss.output_deltas(state.output, targets, store.output_fn)
    delta_h = hidden_deltas(store, state.hidden, delta_o)
    return Deltas(output=delta_o, hidden=delta_h), loss.error(state.output, targets)


__all__ = ["backward", "hidden_deltas"]
