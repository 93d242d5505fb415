import pytest

from qubitsim.__main__ import build_parser, main
from qubitsim.examples import (
    bell_circuit,
    candidate_periods,
    inverse_qft_circuit,
    shors_algorithm,
    shors_circuit,
    teleportation_circuit,
    u_gate,
)
from qubitsim.results import CompoundResult, Result
from qubitsim.simulation import Circuit, ControlledGate, QubitState


def test_bell_circuit(engine):
    result = bell_circuit(engine).simulate(2000)
    assert set(result) == {"00", "11"}


@pytest.mark.parametrize("alpha, beta", [(1, 0), (0, 1)])
def test_teleportation_moves_basis_states(engine, alpha, beta):
    circuit = teleportation_circuit(engine, QubitState(engine, alpha, beta))
    for _ in range(50):
        circuit.reset()
        circuit.run()
        assert circuit.qubits[2].state.prob_1 == pytest.approx(abs(beta) ** 2)


def test_teleportation_structure(engine):
    circuit = teleportation_circuit(engine)
    assert (circuit.qubit_count, circuit.classic_bit_count) == (3, 2)
    names = [gate.name for gate in circuit.gates]
    assert names == ["INIT", "H", "CX", "CX", "H", "MEASURE", "CX", "CZ"]
    corrections = circuit.gates[-2:]
    assert all(isinstance(gate, ControlledGate) and gate.is_classical for gate in corrections)
    assert set(circuit.simulate(200)) <= {"00", "01", "10", "11"}


@pytest.mark.parametrize("a, expected", [(2, 2), (7, 7), (4, 4), (8, 8), (13, 13), (11, 11)])
def test_u_gate_multiplies_one_by_a(a, expected):
    circuit = Circuit(4)
    circuit.add_x_gate(0)
    circuit.add_gate(u_gate(a, 1))
    circuit.execute()
    value = sum(1 << index for index, qubit in enumerate(circuit.qubits) if qubit.state.prob_1 == 1)
    assert value == expected


def test_u_gate_power_and_name():
    gate = u_gate(2, 4)
    assert gate.name == "2^4 mod 15"
    assert len(gate.circuit.gates) == 12
    circuit = Circuit(4)
    circuit.add_x_gate(0)
    circuit.add_gate(gate)
    circuit.execute()
    # 2^4 = 16 = 1 mod 15
    assert circuit.qubits[0].state.prob_1 == 1


@pytest.mark.parametrize("a", [0, 1, 3, 5, 15])
def test_u_gate_requires_coprime_base(a):
    with pytest.raises(ValueError, match="coprime"):
        u_gate(a, 1)


def test_inverse_qft_structure():
    circuit = inverse_qft_circuit(3)
    names = [gate.name for gate in circuit.gates]
    assert names.count("SWAP") == 1
    assert names.count("H") == 3
    assert names.count("CPhase") == 3


def test_shors_circuit_layout(engine):
    circuit = shors_circuit(7, 3, engine=engine)
    assert (circuit.qubit_count, circuit.classic_bit_count) == (7, 3)
    controlled = [gate for gate in circuit.gates if isinstance(gate, ControlledGate) and gate.name.startswith("C7^")]
    assert [gate.control_index for gate in controlled] == [0, 1, 2]
    assert all(gate.gate.qubit_indices == (3, 4, 5, 6) for gate in controlled)


def test_shors_algorithm_histogram(engine):
    result = shors_algorithm(7, 3, repetitions=50, engine=engine)
    assert result.total == 50
    assert all(len(outcome) == 3 for outcome in result)


@pytest.mark.slow
def test_shors_algorithm_larger_register():
    result = shors_algorithm(13, 6, repetitions=200)
    assert result.total == 200


def test_candidate_periods():
    compound = CompoundResult([Result((0, 1, 0))] * 3 + [Result((0, 0, 0))] * 5 + [Result((0, 0, 1))])
    # "010" -> 2/8 = 1/4, "100" -> 4/8 = 1/2, "000" has no period
    assert candidate_periods(compound, 3) == [4, 2]


def test_cli_parser_defaults():
    args = build_parser().parse_args(["bell"])
    assert args.shots == 1000
    assert args.seed is None


def test_cli_runs_bell(capsys):
    assert main(["bell", "--shots", "100", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "q0:" in out
    assert '"00"' in out or '"11"' in out


def test_cli_runs_shor_without_drawing(capsys):
    assert main(["shor", "--a", "2", "--counting-qubits", "2", "--shots", "20", "--seed", "1", "--no-draw"]) == 0
    out = capsys.readouterr().out
    assert "q0:" not in out
    assert "Candidate periods" in out
