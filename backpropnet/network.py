"""Public facade tying configuration, weights, patterns and training together."""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from .core.errors import DimensionMismatch
from .core.patterns import PatternLike, PatternSet
from .core.types import Array, Pattern, TrainingResult, WeightState
from .core.weights import WeightStore
from .training.config import NetworkConfig
from .training.trainer import Trainer

logger = logging.getLogger(__name__)


class Network:
    """A single-hidden-layer perceptron trained by online back-propagation."""

    def __init__(self, config: NetworkConfig) -> None:
        self.config = config
        self.seed = config.seed if config.seed is not None else time.time_ns()
        if config.seed is None:
            logger.info("No seed configured, using wall-clock seed %d", self.seed)
        self.rng = np.random.default_rng(self.seed)
        self.weights = WeightStore(
            input_units=config.input_units,
            hidden_units=config.hidden_units,
            output_units=config.output_units,
            hidden_activation=config.hidden_activation,
            output_activation=config.output_activation,
        )
        self.weights.initialize(config.weight_init_bound, self.rng)
        self.patterns = PatternSet(config.input_units, config.output_units)

    def load_patterns(self, patterns: Iterable[PatternLike]) -> PatternSet:
        """Replace the training set; on error the current set is kept."""

        loaded = PatternSet(self.config.input_units, self.config.output_units, patterns)
        self.patterns = loaded
        return loaded

    def train(self, sinks: Sequence[object] = ()) -> TrainingResult:
        trainer = Trainer(
            self.weights,
            self.patterns,
            self.config,
            self.rng,
            callbacks=sinks,
            seed=self.seed,
        )
        return trainer.run()

    def predict(self, inputs: Sequence[float]) -> Array:
        try:
            vector = np.asarray(inputs, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise DimensionMismatch("Input vector is not a flat numeric sequence") from exc
        if vector.shape != (self.config.input_units,):
            raise DimensionMismatch(
                f"Input vector has shape {vector.shape}, expected ({self.config.input_units},)"
            )
        return self.weights.forward(vector).output

    def evaluate(self) -> List[Tuple[Pattern, Array]]:
        """Forward every loaded pattern, in index order."""

        return [(pattern, self.weights.forward(pattern.inputs).output) for pattern in self.patterns]

    def export_weights(self) -> WeightState:
        return self.weights.state_dict()

    def import_weights(self, state: Mapping[str, Array]) -> None:
        self.weights.load_state_dict(state)


def configure(**options: Any) -> Network:
    """Build a :class:`Network` from keyword options of :class:`NetworkConfig`."""

    return Network(NetworkConfig.from_mapping(options))


__all__ = ["Network", "configure"]
