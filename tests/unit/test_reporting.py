import io

import numpy as np
import pytest

from backpropnet.core.types import Pattern, TelemetryEvent, TerminalState
from backpropnet.reporting import ConsoleSink, PlotAdapter, format_network_table


def test_console_sink_marks_terminal_states():
    stream = io.StringIO()
    sink = ConsoleSink(stream)
    sink.on_epoch(TelemetryEvent(0, 0.5, TerminalState.RUNNING))
    sink(TelemetryEvent(12, 1e-7, TerminalState.CONVERGED))
    sink(TelemetryEvent(99, 0.25, TerminalState.EXHAUSTED))
    lines = stream.getvalue().splitlines()
    assert lines[0] == "Epoch 0      :   Error = 0.500000"
    assert lines[1].endswith("- DONE!")
    assert lines[2].endswith("- STOPPED!")


def test_network_table_layout():
    results = [
        (Pattern(np.array([0.0, 1.0]), np.array([1.0])), np.array([0.97])),
        (Pattern(np.array([1.0, 1.0]), np.array([0.0])), np.array([0.02])),
    ]
    table = format_network_table(results, 42).splitlines()
    assert table[0] == "NETWORK DATA - EPOCH 42"
    assert table[2].split("\t") == ["Pat", "Input1", "Input2", "Expected1", "Real1"]
    assert table[3].split("\t") == ["1", "0.000000", "1.000000", "1.000000", "0.970000"]
    assert format_network_table([], 0).startswith("NETWORK DATA - EPOCH 0")


def test_plot_adapter_headless(tmp_path):
    pytest.importorskip("matplotlib")
    adapter = PlotAdapter(tmp_path, enable_plots=True)
    adapter.on_epoch(TelemetryEvent(0, 1.0, TerminalState.RUNNING))
    adapter.on_epoch(TelemetryEvent(1, 0.5, TerminalState.EXHAUSTED))
    path = adapter.close()
    assert path is not None and path.exists()


def test_plot_adapter_disabled_is_a_noop(tmp_path):
    adapter = PlotAdapter(tmp_path / "plots")
    adapter.on_epoch(TelemetryEvent(0, 1.0, TerminalState.RUNNING))
    assert adapter.close() is None
    assert not (tmp_path / "plots").exists()
