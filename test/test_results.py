import matplotlib
matplotlib.use("Agg")

import pytest

from qubitsim.results import CompoundResult, Result
from qubitsim.simulation import ClassicBit


def test_result_string_is_reversed():
    assert str(Result((1, 0))) == "01"
    assert str(Result((0, 1, 1))) == "110"


def test_result_from_classic_bits():
    result = Result.from_classic_bits([ClassicBit(1), ClassicBit(0), ClassicBit(0)])
    assert result.bits == (1, 0, 0)
    assert result.binary() == "001"
    assert result.to_int() == 1
    assert len(result) == 3


def test_empty_result():
    result = Result(())
    assert str(result) == ""
    assert result.to_int() == 0


def test_result_is_immutable():
    result = Result((1,))
    with pytest.raises(AttributeError):
        result.bits = (0,)


def test_compound_result_counts():
    compound = CompoundResult([Result((1, 0)), Result((1, 0)), Result((1, 1))])
    compound.add_result(Result((0, 0)))
    assert compound.counts == {"01": 2, "11": 1, "00": 1}
    assert compound.total == 4
    assert compound["01"] == 2
    assert compound["10"] == 0
    assert "11" in compound
    assert "10" not in compound
    assert list(compound) == ["00", "01", "11"]
    assert len(compound) == 3
    assert compound.most_common(1) == [("01", 2)]


def test_compound_result_probabilities():
    compound = CompoundResult([Result((0,))] * 3 + [Result((1,))])
    assert compound.probabilities() == {"0": 0.75, "1": 0.25}
    assert CompoundResult().probabilities() == {}


def test_compound_result_string():
    compound = CompoundResult([Result((1, 1)), Result((0, 0)), Result((1, 1))])
    assert str(compound) == '{ "00": 1, "11": 2 }'
    assert str(CompoundResult()) == "{ }"


def test_compound_result_equality():
    first = CompoundResult([Result((1,))])
    second = CompoundResult([Result((1,))])
    assert first == second
    assert first == {"1": 1}
    assert first != CompoundResult()


def test_publish_histogram(tmp_path):
    compound = CompoundResult([Result((0, 0))] * 5 + [Result((1, 1))] * 3)
    target = tmp_path / "plots" / "bell.png"
    ax = compound.publish_histogram(title="Bell", normalize=True, save=str(target))
    assert target.exists()
    assert ax.get_title() == "Bell"
    heights = [patch.get_height() for patch in ax.patches]
    assert heights == pytest.approx([5 / 8, 3 / 8])
