"""Reporting utilities for backpropnet."""

from .console import ConsoleSink, format_network_table
from .metrics import CsvSink, HistorySink, JsonlSink
from .plots import PlotAdapter

__all__ = [
    "ConsoleSink",
    "CsvSink",
    "HistorySink",
    "JsonlSink",
    "PlotAdapter",
    "format_network_table",
]
