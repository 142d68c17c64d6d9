import pytest

from backpropnet.core.errors import InvalidConfiguration
from backpropnet.data import available, get_patterns
from backpropnet.data.logic import truth_table


def test_logic_datasets_are_registered():
    names = set(available())
    assert {"xor", "xnor", "and", "or", "nand", "nor", "parity"} <= names


def test_xor_patterns():
    patterns = get_patterns("xor")
    assert patterns == [
        ([0.0, 0.0], [0.0]),
        ([1.0, 0.0], [1.0]),
        ([0.0, 1.0], [1.0]),
        ([1.0, 1.0], [0.0]),
    ]


def test_gate_truth_tables():
    assert [t for _, t in get_patterns("and")] == [[0.0], [0.0], [0.0], [1.0]]
    assert [t for _, t in get_patterns("nor", n_inputs=3)][0] == [1.0]
    parity = get_patterns("parity", n_inputs=3)
    assert len(parity) == 8
    assert all(t == [float(sum(x) % 2)] for x, t in parity)


def test_unknown_dataset():
    with pytest.raises(KeyError):
        get_patterns("majority")


def test_bad_dataset_options_are_configuration_errors():
    with pytest.raises(InvalidConfiguration, match="bogus"):
        get_patterns("xor", bogus=1)
    with pytest.raises(InvalidConfiguration, match="n_inputs"):
        get_patterns("parity", n_inputs=0)
    with pytest.raises(InvalidConfiguration):
        get_patterns("and", n_inputs="two")


def test_truth_table_rejects_empty_input():
    with pytest.raises(InvalidConfiguration):
        truth_table(0, lambda bits: 0)
