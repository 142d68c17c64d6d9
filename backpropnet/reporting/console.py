"""Console reporting of telemetry and final network outputs."""

from __future__ import annotations

import sys
from typing import List, Sequence, TextIO, Tuple

from ..core.types import Array, Pattern, TelemetryEvent, TerminalState

_SUFFIX = {
    TerminalState.RUNNING: "",
    TerminalState.CONVERGED: " - DONE!",
    TerminalState.EXHAUSTED: " - STOPPED!",
}


class ConsoleSink:
    """Print one ``Epoch N : Error = E`` line per event."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def on_epoch(self, event: TelemetryEvent) -> None:
        line = f"Epoch {event.epoch:<6d} :   Error = {event.error:f}{_SUFFIX[event.state]}"
        print(line, file=self.stream)

    __call__ = on_epoch


def format_network_table(results: Sequence[Tuple[Pattern, Array]], epoch: int) -> str:
    """Render inputs, targets and outputs of every pattern as a tab-separated table."""

    if not results:
        return f"NETWORK DATA - EPOCH {epoch}\n"
    n_in = results[0][0].inputs.shape[0]
    n_out = results[0][0].targets.shape[0]
    header: List[str] = ["Pat"]
    header += [f"Input{i + 1}" for i in range(n_in)]
    for k in range(n_out):
        header += [f"Expected{k + 1}", f"Real{k + 1}"]
    lines = [f"NETWORK DATA - EPOCH {epoch}", "", "\t".join(header)]
    for index, (pattern, output) in enumerate(results, start=1):
        row = [str(index)]
        row += [f"{value:f}" for value in pattern.inputs]
        for target, real in zip(pattern.targets, output):
            row += [f"{target:f}", f"{real:f}"]
        lines.append("\t".join(row))
    return "\n".join(lines) + "\n"


__all__ = ["ConsoleSink", "format_network_table"]
