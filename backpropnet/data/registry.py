"""Registry of named pattern sets."""

from __future__ import annotations

import inspect
from typing import Any, Callable, List, MutableMapping, Sequence, Tuple

from ..core.errors import InvalidConfiguration

PatternList = List[Tuple[Sequence[float], Sequence[float]]]
PatternFactory = Callable[..., PatternList]


_REGISTRY: MutableMapping[str, PatternFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: PatternFactory | None = None,
) -> Callable[[PatternFactory], PatternFactory] | PatternFactory:
    """Register a pattern-set factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor():
            ...

    or directly::

        register_dataset("xor", make_xor)
    """

    def _decorator(func: PatternFactory) -> PatternFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_patterns(name: str, /, **options: Any) -> PatternList:
    """Return the ``(inputs, targets)`` pairs of the dataset ``name``."""

    if name not in _REGISTRY:
        raise KeyError(f"Unknown dataset: {name}")
    factory = _REGISTRY[name]
    try:
        inspect.signature(factory).bind(**options)
    except TypeError as exc:
        raise InvalidConfiguration(f"Bad options for dataset {name!r}: {exc}") from exc
    return factory(**options)


def available() -> List[str]:
    return sorted(_REGISTRY)


__all__ = ["register_dataset", "get_patterns", "available", "PatternList"]
