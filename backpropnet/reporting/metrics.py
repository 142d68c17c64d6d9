"""Telemetry sinks for training runs."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from ..core.types import TelemetryEvent


class JsonlSink:
    """Append-only JSONL writer for epoch telemetry."""

    def __init__(self, path: str | Path, *, seed: int | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.seed = seed

    def on_epoch(self, event: TelemetryEvent) -> None:
        record = event.as_record()
        record["seed"] = self.seed
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_epoch


class CsvSink:
    """Write epoch telemetry to CSV with a stable schema."""

    fieldnames = ("epoch", "error", "state")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")

    def on_epoch(self, event: TelemetryEvent) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.fieldnames)
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(event.as_record())

    __call__ = on_epoch


class HistorySink:
    """Keep every event in memory."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    @property
    def last(self) -> TelemetryEvent | None:
        return self.events[-1] if self.events else None

    def on_epoch(self, event: TelemetryEvent) -> None:
        self.events.append(event)


__all__ = ["JsonlSink", "CsvSink", "HistorySink"]
