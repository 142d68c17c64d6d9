"""Core numerical primitives for backpropnet."""

from . import activations, backprop, errors, patterns, types, weights

__all__ = ["activations", "backprop", "errors", "patterns", "types", "weights"]
