import math

import pytest

from qubitsim.simulation import (
    BitState,
    ClassicBit,
    InvalidStateError,
    ProbabilityEngine,
    Qubit,
    QubitState,
)


def test_default_state_is_zero(engine):
    state = QubitState(engine)
    assert state.alpha == 1
    assert state.beta == 0
    assert state.prob_0 == 1.0


def test_explicit_amplitudes(engine):
    state = QubitState(engine, 1 / math.sqrt(2), 1j / math.sqrt(2))
    assert state.prob_0 == pytest.approx(0.5)
    assert state.prob_1 == pytest.approx(0.5)


@pytest.mark.parametrize("alpha, beta", [
    (1, 1),
    (0, 0),
    (0.5, 0.5),
    (1 + 1e-6, 0),
])
def test_invalid_amplitudes_rejected(engine, alpha, beta):
    with pytest.raises(InvalidStateError):
        QubitState(engine, alpha, beta)


def test_failed_set_keeps_previous_state(engine):
    state = QubitState(engine, 0.6, 0.8)
    with pytest.raises(InvalidStateError) as excinfo:
        state.set(0.6, 0.6)
    assert excinfo.value.alpha == 0.6
    assert state.alpha == 0.6
    assert state.beta == 0.8


def test_invalid_state_is_a_value_error(engine):
    with pytest.raises(ValueError):
        QubitState(engine, 2, 0)


def test_tolerance_follows_engine_margin():
    loose = ProbabilityEngine(error_margin=1e-2)
    QubitState(loose, 1.001, 0)
    with pytest.raises(InvalidStateError):
        QubitState(ProbabilityEngine(), 1.001, 0)


def test_random_states_are_normalized(engine):
    for _ in range(200):
        state = QubitState.random(engine)
        assert engine.compare(state.prob_0 + state.prob_1, 1.0)


def test_state_str(engine):
    assert str(QubitState(engine)) == "1|0⟩ + 0|1⟩"
    assert str(QubitState(engine, 0, -1)) == "0|0⟩ + -1|1⟩"
    assert str(QubitState(engine, 0, 1j)) == "0|0⟩ + 1i|1⟩"


def test_measure_zero_and_one_are_deterministic(engine):
    qubit = Qubit(engine)
    for _ in range(100):
        assert qubit.measure().state is BitState.ZERO
    qubit.set_state(0, 1)
    for _ in range(100):
        assert qubit.measure().state is BitState.ONE


def test_measure_collapses_state(engine):
    qubit = Qubit(engine)
    qubit.set_state(1 / math.sqrt(2), 1 / math.sqrt(2))
    outcome = qubit.measure()
    if outcome:
        assert (qubit.state.alpha, qubit.state.beta) == (0, 1)
    else:
        assert (qubit.state.alpha, qubit.state.beta) == (1, 0)
    # reading again gives the same, post-collapse value
    for _ in range(20):
        assert qubit.measure() == outcome


def test_measure_statistics_follow_amplitudes(engine):
    zeros = 0
    trials = 10000
    qubit = Qubit(engine)
    for _ in range(trials):
        qubit.set_state(0.5, math.sqrt(0.75))
        zeros += qubit.measure().state is BitState.ZERO
    assert 0.22 < zeros / trials < 0.28


def test_qubit_set_state_from_state_object(engine):
    qubit = Qubit(engine)
    source = QubitState(engine, 0, 1)
    qubit.set_state(source)
    assert qubit.state == source
    assert qubit.state is not source
    qubit.reset()
    assert qubit.state == QubitState(engine)


def test_qubit_set_state_needs_two_amplitudes(engine):
    with pytest.raises(TypeError):
        Qubit(engine).set_state(1)


def test_qubit_shares_engine(engine):
    qubit = Qubit(engine)
    assert qubit.engine is engine
    assert qubit.copy().engine is engine


def test_classic_bit_defaults_and_rendering():
    bit = ClassicBit()
    assert bit.state is BitState.ZERO
    assert str(bit) == "0"
    bit.set_state(ClassicBit.ONE)
    assert str(bit) == "1"
    assert bool(bit) and int(bit) == 1
    bit.reset()
    assert not bit


@pytest.mark.parametrize("value, expected", [
    (True, BitState.ONE),
    (False, BitState.ZERO),
    (1, BitState.ONE),
    (0, BitState.ZERO),
    (BitState.ONE, BitState.ONE),
])
def test_classic_bit_construction(value, expected):
    assert ClassicBit(value).state is expected


@pytest.mark.parametrize("value", [2, -1, "1", None])
def test_classic_bit_rejects_other_values(value):
    with pytest.raises(ValueError):
        ClassicBit(value)
