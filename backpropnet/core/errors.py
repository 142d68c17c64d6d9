"""Exceptions raised by backpropnet."""

from __future__ import annotations


class BackpropNetError(Exception):
    """Base class for all errors raised by the trainer."""


class DimensionMismatch(BackpropNetError, ValueError):
    """A vector or matrix shape disagrees with the configured unit counts."""


class InvalidConfiguration(BackpropNetError, ValueError):
    """The network or training configuration cannot be used."""


class NumericDivergence(BackpropNetError, ArithmeticError):
    """An activation, weight or error value became non-finite during training."""

    def __init__(self, message: str, *, epoch: int | None = None, pattern_index: int | None = None):
        super().__init__(message)
        self.epoch = epoch
        self.pattern_index = pattern_index


__all__ = [
    "BackpropNetError",
    "DimensionMismatch",
    "InvalidConfiguration",
    "NumericDivergence",
]
