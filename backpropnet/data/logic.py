"""Binary logic pattern sets."""

from __future__ import annotations

import itertools
from typing import Callable, Sequence

from ..core.errors import InvalidConfiguration
from .registry import PatternList, register_dataset


def truth_table(n_inputs: int, rule: Callable[[Sequence[int]], int]) -> PatternList:
    """Enumerate all ``2**n_inputs`` binary inputs labelled by ``rule``."""

    if not isinstance(n_inputs, int) or isinstance(n_inputs, bool) or n_inputs <= 0:
        raise InvalidConfiguration(f"n_inputs must be positive, got {n_inputs}")
    patterns: PatternList = []
    for bits in itertools.product((0, 1), repeat=n_inputs):
        patterns.append(([float(b) for b in bits], [float(rule(bits))]))
    return patterns


def _gate(rule: Callable[[Sequence[int]], int]) -> Callable[..., PatternList]:
    def _factory(n_inputs: int = 2) -> PatternList:
        return truth_table(n_inputs, rule)

    return _factory


@register_dataset("xor")
def xor() -> PatternList:
    """The classic four XOR patterns."""

    return [
        ([0.0, 0.0], [0.0]),
        ([1.0, 0.0], [1.0]),
        ([0.0, 1.0], [1.0]),
        ([1.0, 1.0], [0.0]),
    ]


@register_dataset("parity")
def parity(n_inputs: int = 3) -> PatternList:
    """N-bit parity; ``n_inputs=2`` is XOR."""

    return truth_table(n_inputs, lambda bits: sum(bits) % 2)


register_dataset("xnor", _gate(lambda bits: 1 - sum(bits) % 2))
register_dataset("and", _gate(lambda bits: int(all(bits))))
register_dataset("or", _gate(lambda bits: int(any(bits))))
register_dataset("nand", _gate(lambda bits: 1 - int(all(bits))))
register_dataset("nor", _gate(lambda bits: 1 - int(any(bits))))

__all__ = ["truth_table", "xor", "parity"]
