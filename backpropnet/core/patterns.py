"""Fixed in-memory training pattern sets."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatch
from .types import Array, Pattern

PatternLike = Tuple[Sequence[float], Sequence[float]]


def _as_vector(values: Sequence[float], expected: int, *, kind: str, index: int) -> Array:
    try:
        vector = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DimensionMismatch(
            f"Pattern {index}: {kind} vector is not a flat numeric sequence"
        ) from exc
    if vector.ndim != 1 or vector.shape[0] != expected:
        raise DimensionMismatch(
            f"Pattern {index}: {kind} vector has shape {vector.shape}, expected ({expected},)"
        )
    return vector


class PatternSet:
    """An ordered, immutable sequence of patterns.

    Content never changes after construction; :meth:`shuffle` only decides the
    order in which patterns are visited.
    """

    def __init__(self, input_units: int, output_units: int, patterns: Iterable[PatternLike] = ()):
        self.input_units = int(input_units)
        self.output_units = int(output_units)
        converted: list[Pattern] = []
        for index, item in enumerate(patterns):
            try:
                inputs, targets = item
            except (TypeError, ValueError) as exc:
                raise DimensionMismatch(
                    f"Pattern {index} must be an (inputs, targets) pair"
                ) from exc
            converted.append(
                Pattern(
                    inputs=_as_vector(inputs, self.input_units, kind="input", index=index),
                    targets=_as_vector(targets, self.output_units, kind="target", index=index),
                )
            )
        for pattern in converted:
            pattern.inputs.setflags(write=False)
            pattern.targets.setflags(write=False)
        self._patterns: tuple[Pattern, ...] = tuple(converted)

    def __len__(self) -> int:
        return len(self._patterns)

    def __getitem__(self, index: int) -> Pattern:
        return self._patterns[index]

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    def shuffle(self, rng: np.random.Generator) -> Array:
        """Return a uniformly random visitation order over all indices."""

        return rng.permutation(len(self._patterns))


__all__ = ["PatternSet", "PatternLike"]
