from typing import Optional

from ..simulation import Circuit, ProbabilityEngine


def bell_circuit(engine: Optional[ProbabilityEngine] = None) -> Circuit:
    """Two qubits put into a Bell pair and measured into two classic bits.

    Because the CX reads its control by measuring it, the outcomes are
    perfectly correlated: only ``00`` and ``11`` are ever observed.
    """
    circuit = Circuit(2, 2, engine=engine)
    circuit.add_hadamard_gate(0)
    circuit.add_cx_gate(0, 1)
    circuit.add_measure_gate([(0, 0), (1, 1)])
    return circuit
