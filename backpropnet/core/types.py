"""Core typing contracts for backpropnet."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class Pattern:
    """A single training example."""

    inputs: Array
    targets: Array


@dataclass(frozen=True)
class ForwardState:
    """Activations captured during the forward pass of one pattern."""

    hidden_sums: Array
    hidden: Array
    output_sums: Array
    output: Array


@dataclass(frozen=True)
class Deltas:
    """Error deltas with respect to the pre-activation sums."""

    output: Array
    hidden: Array


class TerminalState(str, enum.Enum):
    """States of the epoch driver."""

    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self is not TerminalState.RUNNING


@dataclass(frozen=True)
class TelemetryEvent:
    """Per-epoch telemetry handed to the reporting sinks."""

    epoch: int
    error: float
    state: TerminalState

    def as_record(self) -> Dict[str, object]:
        return {"epoch": int(self.epoch), "error": float(self.error), "state": self.state.value}


@dataclass(frozen=True)
class TrainingResult:
    """Summary returned by :meth:`backpropnet.training.trainer.Trainer.run`."""

    final_epoch: int
    final_error: float
    terminal_state: TerminalState
    epochs: int
    seed: int | None = None

    @property
    def converged(self) -> bool:
        return self.terminal_state is TerminalState.CONVERGED


WeightState = Dict[str, Array]
