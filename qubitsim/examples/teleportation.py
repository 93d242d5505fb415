from typing import Optional

from ..simulation import Circuit, ProbabilityEngine, QubitState, X, Z
from ..log import get_logger

logger = get_logger(__name__)


def teleportation_circuit(engine: Optional[ProbabilityEngine] = None, state: Optional[QubitState] = None) -> Circuit:
    """
    Quantum teleportation of qubit 0 onto qubit 2.

    1. qubit 0 is initialised to ``state`` (a random state by default),
    2. qubits 1 and 2 are entangled,
    3. qubit 0 is entangled with qubit 1 and rotated back,
    4. qubits 0 and 1 are measured into classic bits 0 and 1,
    5. X and Z corrections are applied to qubit 2, classically controlled by those bits.
    """
    engine = engine if engine is not None else ProbabilityEngine()
    circuit = Circuit(3, 2, engine=engine)
    if state is None:
        state = QubitState.random(engine)
    logger.debug(f"Teleporting {state}")

    circuit.add_init_gate(0, state)

    circuit.add_hadamard_gate(1)
    circuit.add_cx_gate(1, 2)

    circuit.add_cx_gate(0, 1)
    circuit.add_hadamard_gate(0)

    circuit.add_measure_gate([(0, 0), (1, 1)])

    circuit.add_gate(X(2).make_controlled(1, is_classical=True))
    circuit.add_gate(Z(2).make_controlled(0, is_classical=True))
    return circuit
