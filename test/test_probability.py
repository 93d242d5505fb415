import pytest

from qubitsim.config import DEFAULT_ERROR_MARGIN
from qubitsim.simulation import ProbabilityEngine


def test_default_error_margin():
    assert ProbabilityEngine().error_margin == DEFAULT_ERROR_MARGIN == 2e-10


def test_draws_are_in_unit_interval(engine):
    draws = [engine.get_probability() for _ in range(5000)]
    assert all(0.0 <= p < 1.0 for p in draws)
    # roughly uniform
    assert 0.45 < sum(draws) / len(draws) < 0.55
    assert 0.2 < sum(p < 0.25 for p in draws) / len(draws) < 0.3


def test_same_seed_same_stream():
    first = ProbabilityEngine(seed=42)
    second = ProbabilityEngine(seed=42)
    assert [first.get_probability() for _ in range(10)] == [second.get_probability() for _ in range(10)]


def test_seed_from_environment(monkeypatch):
    monkeypatch.setenv("QUBITSIM_SEED", "9")
    first, second = ProbabilityEngine(), ProbabilityEngine()
    assert first.seed == 9
    assert first.get_probability() == second.get_probability()


def test_error_margin_from_environment(monkeypatch):
    monkeypatch.setenv("QUBITSIM_ERROR_MARGIN", "1e-6")
    assert ProbabilityEngine().error_margin == 1e-6
    assert ProbabilityEngine(error_margin=1e-3).error_margin == 1e-3


@pytest.mark.parametrize("margin", [0, -1e-9])
def test_non_positive_margin_rejected(margin):
    with pytest.raises(ValueError):
        ProbabilityEngine(error_margin=margin)


@pytest.mark.parametrize("a, b, expected", [
    (1.0, 1.0, True),
    (1.0, 1.0 + 1e-11, True),
    (1.0, 1.0 - 1e-11, True),
    (1.0, 1.0 + 1e-9, False),
    (0.0, 0.5, False),
])
def test_compare_uses_error_margin(a, b, expected):
    assert ProbabilityEngine().compare(a, b) is expected


def test_compare_with_custom_margin():
    engine = ProbabilityEngine(error_margin=0.1)
    assert engine.compare(1.0, 1.05)
    assert not engine.compare(1.0, 1.2)
