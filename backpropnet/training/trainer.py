"""Online back-propagation training loop."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..core.backprop import backward
from ..core.errors import InvalidConfiguration, NumericDivergence
from ..core.patterns import PatternSet
from ..core.types import ForwardState, TelemetryEvent, TerminalState, TrainingResult
from ..core.weights import WeightStore
from .config import NetworkConfig
from .losses import REGISTRY as LOSS_REGISTRY

logger = logging.getLogger(__name__)


class Trainer:
    """Drive shuffled forward/backward/update cycles until a terminal state.

    The driver is a two-exit state machine: ``RUNNING`` moves to
    ``CONVERGED`` when an epoch's error drops below the convergence threshold,
    or to ``EXHAUSTED`` when ``max_epochs`` epochs have completed. Non-finite
    values raise :class:`NumericDivergence` instead.
    """

    def __init__(
        self,
        weights: WeightStore,
        patterns: PatternSet,
        config: NetworkConfig,
        rng: np.random.Generator,
        callbacks: Sequence[object] | None = None,
        *,
        seed: int | None = None,
    ) -> None:
        self.weights = weights
        self.patterns = patterns
        self.config = config
        self.rng = rng
        self.callbacks = list(callbacks or [])
        self.seed = seed
        self.loss = LOSS_REGISTRY.resolve(config.loss, output_activation=config.output_activation)
        self.state = TerminalState.RUNNING
        self.epoch = 0

    def run(self) -> TrainingResult:
        if len(self.patterns) == 0:
            raise InvalidConfiguration("No training patterns loaded")

        cfg = self.config
        logger.info(
            "Training %d-%d-%d network (%d weights) on %d patterns (seed=%s)",
            cfg.input_units,
            cfg.hidden_units,
            cfg.output_units,
            self.weights.parameter_count(),
            len(self.patterns),
            self.seed,
        )
        self.state = TerminalState.RUNNING
        self.epoch = 0
        error = float("nan")
        while True:
            error = self._run_epoch(self.epoch)
            if error < cfg.convergence_threshold:
                self.state = TerminalState.CONVERGED
            elif self.epoch + 1 >= cfg.max_epochs:
                self.state = TerminalState.EXHAUSTED

            if self.state.is_terminal:
                self._emit(TelemetryEvent(self.epoch, error, self.state))
                break
            if self.epoch % cfg.report_interval == 0:
                logger.debug("Epoch %d: error=%f", self.epoch, error)
                self._emit(TelemetryEvent(self.epoch, error, self.state))
            self.epoch += 1

        logger.info("Training %s at epoch %d with error %g", self.state.value, self.epoch, error)
        return TrainingResult(
            final_epoch=self.epoch,
            final_error=error,
            terminal_state=self.state,
            epochs=self.epoch + 1,
            seed=self.seed,
        )

    # ------------------------------------------------------------------
    # Internal helpers

    def _run_epoch(self, epoch: int) -> float:
        cfg = self.config
        order = self.patterns.shuffle(self.rng)
        total = 0.0
        # Overflow and nan propagation are reported through _check_finite.
        with np.errstate(over="ignore", invalid="ignore"):
            for index in order:
                pattern = self.patterns[int(index)]
                forward = self.weights.forward(pattern.inputs)
                deltas, pattern_error = backward(self.weights, forward, pattern.targets, self.loss)
                self.weights.apply_update(
                    pattern.inputs,
                    forward.hidden,
                    deltas,
                    cfg.learning_rate_ih,
                    cfg.learning_rate_ho,
                    cfg.momentum,
                )
                if cfg.clamp_output_weights:
                    self.weights.clamp_output_weights(cfg.clamp_range)
                total += pattern_error
                self._check_finite(forward, total, epoch, int(index))
        return total

    def _check_finite(self, forward: ForwardState, total: float, epoch: int, index: int) -> None:
        if not np.all(np.isfinite(forward.hidden)) or not np.all(np.isfinite(forward.output)):
            problem = "activation"
        elif not np.isfinite(total):
            problem = "error"
        elif not self.weights.is_finite():
            problem = "weight"
        else:
            return
        raise NumericDivergence(
            f"Non-finite {problem} value at epoch {epoch}, pattern {index}",
            epoch=epoch,
            pattern_index=index,
        )

    def _emit(self, event: TelemetryEvent) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(event)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(event)


__all__ = ["Trainer"]
