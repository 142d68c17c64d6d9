"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from ..core.types import TelemetryEvent


class PlotAdapter:
    """Collect epoch errors and optionally emit a matplotlib figure."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_epoch(self, event: TelemetryEvent) -> None:
        if not self.enable_plots:
            return
        self._history.append((event.epoch, float(event.error)))

    def close(self) -> Path | None:
        if not self.enable_plots or not self._history:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        epochs, errors = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(epochs, errors)
        ax.set_yscale("log")
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Error")
        ax.set_title("Training Curve")
        plot_path = self.run_dir / "error.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path

    __call__ = on_epoch
