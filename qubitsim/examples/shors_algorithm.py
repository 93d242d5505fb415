"""
Period finding for f(x) = a^x mod 15, the quantum half of Shor's algorithm.

The counting register is put in superposition, controls powers of a modular
multiplication unitary (each one a whole sub-circuit wrapped as a gate), goes
through an inverse Fourier transform and is measured.
"""
import math
from fractions import Fraction
from typing import List, Optional

from ..results import CompoundResult
from ..simulation import Circuit, CircuitGate, ProbabilityEngine
from ..log import get_logger

logger = get_logger(__name__)

N = 15
COPRIME_BASES = (2, 4, 7, 8, 11, 13)


def u_gate(a: int, power: int) -> CircuitGate:
    """Multiplication by ``a**power`` mod 15 on four qubits, as a circuit gate.

    Raises:
        ValueError: ``a`` is not coprime to 15.
    """
    if a not in COPRIME_BASES:
        raise ValueError(f"a must be coprime to N ({N}), got {a}")
    circuit = Circuit(4)
    for _ in range(power):
        if a in (2, 13):
            circuit.add_swap_gate(2, 3)
            circuit.add_swap_gate(1, 2)
            circuit.add_swap_gate(0, 1)
        elif a in (7, 8):
            circuit.add_swap_gate(0, 1)
            circuit.add_swap_gate(1, 2)
            circuit.add_swap_gate(2, 3)
        elif a in (4, 11):
            circuit.add_swap_gate(1, 3)
            circuit.add_swap_gate(0, 2)
        if a in (7, 11, 13):
            for index in range(4):
                circuit.add_x_gate(index)
    return circuit.to_gate(name=f"{a}^{power} mod {N}")


def inverse_qft_circuit(n: int, engine: Optional[ProbabilityEngine] = None) -> Circuit:
    """Inverse QFT on ``n`` qubits.

    The controlled phases use negative angles, undoing the forward rotations.
    Each control is measured when applied, so the sign does not change the
    measured histogram.
    """
    circuit = Circuit(n, n, engine=engine)
    for index in range(n // 2):
        circuit.add_swap_gate(index, n - index - 1)
    for i in range(n):
        for j in range(i):
            circuit.add_cphase_gate(j, i, -math.pi / 2 ** (i - j))
        circuit.add_hadamard_gate(i)
    return circuit


def shors_circuit(a: int, counting_qubits: int, engine: Optional[ProbabilityEngine] = None) -> Circuit:
    engine = engine if engine is not None else ProbabilityEngine()
    circuit = Circuit(counting_qubits + 4, counting_qubits, engine=engine)

    for index in range(counting_qubits):
        circuit.add_hadamard_gate(index)

    # auxiliary register starts in |1⟩
    circuit.add_x_gate(counting_qubits)

    target = [counting_qubits + offset for offset in range(4)]
    for index in range(counting_qubits):
        gate = u_gate(a, 2 ** index)
        gate.set_qubit_indices(target)
        circuit.add_gate(gate.make_controlled(index))

    circuit += inverse_qft_circuit(counting_qubits, engine=engine)

    for index in range(counting_qubits):
        circuit.add_measure_gate([(index, index)])
    return circuit


def shors_algorithm(a: int, counting_qubits: int, repetitions: int = 1000,
                    engine: Optional[ProbabilityEngine] = None) -> CompoundResult:
    circuit = shors_circuit(a, counting_qubits, engine=engine)
    logger.debug(f"Shor circuit for a={a}: {circuit!r}")
    return circuit.simulate(repetitions)


def candidate_periods(result: CompoundResult, counting_qubits: int) -> List[int]:
    """Periods suggested by the measured phases, via continued fractions, most frequent outcome first."""
    periods = []
    for outcome, _ in result.most_common():
        phase = Fraction(int(outcome, 2), 2 ** counting_qubits)
        period = phase.limit_denominator(N).denominator
        if period > 1 and period not in periods:
            periods.append(period)
    return periods
