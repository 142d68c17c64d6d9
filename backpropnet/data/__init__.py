"""Named training pattern sets."""

from . import logic as _logic  # noqa: F401  (registers the logic datasets)
from .registry import available, get_patterns, register_dataset

__all__ = ["available", "get_patterns", "register_dataset"]
