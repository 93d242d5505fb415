from typing import List, Optional, Sequence, TextIO, Tuple, Union

from .classic_bit import ClassicBit
from .probability import ProbabilityEngine
from .qubit import Qubit, QubitState
from .quantum_gates import (
    CH,
    CPhase,
    CX,
    CY,
    CZ,
    CircuitGate,
    H,
    INIT,
    MEASURE,
    PRINT,
    Phase,
    QuantumGate,
    SWAP,
    X,
    Y,
    Z,
)
from .utilities import CircuitSizeMismatchError, RecursiveCircuitError
from .visualization_tools import draw_circuit
from ..config import DEFAULT_SHOTS
from ..results import CompoundResult, Result
from ..log import get_logger

logger = get_logger(__name__)


class Circuit:
    """
    A register of qubits and classic bits plus an ordered program of gates.

    Gates are verified against the current register sizes when they are added;
    a rejected gate leaves the program untouched. Every qubit draws its
    measurement outcomes from the circuit's single :class:`ProbabilityEngine`.

    Args:
        qubit_count (int): Number of qubits, all starting in |0⟩.
        classic_bit_count (int, optional): Number of classic bits, all starting at 0. Defaults to 0.
        engine (ProbabilityEngine, optional): Shared random source. A new one is created when omitted.
    """
    def __init__(self, qubit_count: int, classic_bit_count: int = 0, engine: Optional[ProbabilityEngine] = None):
        if qubit_count < 0 or classic_bit_count < 0:
            raise ValueError(
                f"Register sizes must be non-negative, got {qubit_count} qubits and {classic_bit_count} classic bits"
            )
        self.engine: ProbabilityEngine = engine if engine is not None else ProbabilityEngine()
        self.qubits: List[Qubit] = [Qubit(self.engine) for _ in range(qubit_count)]
        self.classic_bits: List[ClassicBit] = [ClassicBit() for _ in range(classic_bit_count)]
        self._gates: List[QuantumGate] = []

    @property
    def qubit_count(self) -> int:
        return len(self.qubits)

    @property
    def classic_bit_count(self) -> int:
        return len(self.classic_bits)

    @property
    def gates(self) -> Tuple[QuantumGate, ...]:
        return tuple(self._gates)

    def reset(self) -> None:
        """Put every qubit back in |0⟩ and every classic bit back to 0. The gates are kept."""
        for qubit in self.qubits:
            qubit.reset()
        for bit in self.classic_bits:
            bit.reset()

    def add_gate(self, gate: QuantumGate) -> QuantumGate:
        """Verify a copy of ``gate`` against this circuit and append it.

        Returns:
            QuantumGate: The copy now owned by the circuit.
        """
        owned = gate.clone()
        if any(sub is self for sub in owned.sub_circuits()):
            raise RecursiveCircuitError()
        owned.bind(self)
        owned.verify(self)
        self._gates.append(owned)
        logger.debug(f"Added {owned!r} (gate #{len(self._gates)})")
        return owned

    def add_hadamard_gate(self, qubit_index: int) -> QuantumGate:
        return self.add_gate(H(qubit_index))

    def add_x_gate(self, qubit_index: int) -> QuantumGate:
        return self.add_gate(X(qubit_index))

    def add_y_gate(self, qubit_index: int) -> QuantumGate:
        return self.add_gate(Y(qubit_index))

    def add_z_gate(self, qubit_index: int) -> QuantumGate:
        return self.add_gate(Z(qubit_index))

    def add_phase_gate(self, qubit_index: int, angle: float) -> QuantumGate:
        return self.add_gate(Phase(qubit_index, angle))

    def add_swap_gate(self, qubit_index_1: int, qubit_index_2: int) -> QuantumGate:
        return self.add_gate(SWAP(qubit_index_1, qubit_index_2))

    def add_measure_gate(self, pairs: Sequence[Tuple[int, int]]) -> QuantumGate:
        return self.add_gate(MEASURE(pairs))

    def add_ch_gate(self, control_index: int, target_index: int) -> QuantumGate:
        return self.add_gate(CH(control_index, target_index))

    def add_cx_gate(self, control_index: int, target_index: int) -> QuantumGate:
        return self.add_gate(CX(control_index, target_index))

    def add_cy_gate(self, control_index: int, target_index: int) -> QuantumGate:
        return self.add_gate(CY(control_index, target_index))

    def add_cz_gate(self, control_index: int, target_index: int) -> QuantumGate:
        return self.add_gate(CZ(control_index, target_index))

    def add_cphase_gate(self, control_index: int, target_index: int, angle: float) -> QuantumGate:
        return self.add_gate(CPhase(control_index, target_index, angle))

    def add_init_gate(self, qubit_index: int, state: Union[QubitState, Tuple[complex, complex]]) -> QuantumGate:
        return self.add_gate(INIT(qubit_index, state))

    def add_print_gate(self, qubit_index: int, sink: Optional[TextIO] = None) -> QuantumGate:
        return self.add_gate(PRINT(qubit_index, sink))

    def add_circuit_gate(
        self, circuit: "Circuit", qubit_indices: Optional[Sequence[int]] = None, name: Optional[str] = None
    ) -> QuantumGate:
        return self.add_gate(CircuitGate(circuit, qubit_indices, name=name))

    def to_gate(self, name: Optional[str] = None, qubit_indices: Optional[Sequence[int]] = None) -> CircuitGate:
        """Wrap this circuit (shared, not copied) in a :class:`CircuitGate`."""
        return CircuitGate(self, qubit_indices, name=name)

    def execute(self) -> None:
        """Apply every gate once, in order, to the current state."""
        for gate in self._gates:
            gate.apply(self)

    def run(self) -> Result:
        self.execute()
        return Result.from_classic_bits(self.classic_bits)

    def simulate(self, count: int = DEFAULT_SHOTS) -> CompoundResult:
        """Reset and run the circuit ``count`` times, collecting the outcomes.

        Args:
            count (int, optional): Number of trials. Defaults to ``DEFAULT_SHOTS``.

        Returns:
            CompoundResult: Outcome bit string -> number of trials that produced it.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        logger.debug(f"Simulating {self!r} for {count} trials")
        compound = CompoundResult()
        for _ in range(count):
            self.reset()
            compound.add_result(self.run())
        logger.debug(f"Simulation finished: {compound}")
        return compound

    def copy(self) -> "Circuit":
        """New circuit with the same register sizes and engine and clones of every gate."""
        duplicate = Circuit(self.qubit_count, self.classic_bit_count, engine=self.engine)
        duplicate._gates = [gate.clone() for gate in self._gates]
        return duplicate

    def __iadd__(self, other: "Circuit") -> "Circuit":
        """Append clones of ``other``'s gates.

        ``other`` may be smaller than this circuit (its gates act on the lowest
        indices) but not larger in either register.
        """
        if other.qubit_count > self.qubit_count or other.classic_bit_count > self.classic_bit_count:
            raise CircuitSizeMismatchError(
                (self.qubit_count, self.classic_bit_count),
                (other.qubit_count, other.classic_bit_count),
            )
        clones = [gate.clone() for gate in other.gates]
        for gate in clones:
            if any(sub is self for sub in gate.sub_circuits()):
                raise RecursiveCircuitError()
            gate.verify(self)
        self._gates.extend(clones)
        logger.debug(f"Appended {len(clones)} gates from {other!r}")
        return self

    def depth(self) -> int:
        depth_at_wire = [0] * (self.qubit_count + self.classic_bit_count)
        for gate in self._gates:
            wires = list(gate.qubit_indices)
            wires += [self.qubit_count + index for index in gate.classic_bit_indices]
            if not wires:
                continue
            new_depth = max(depth_at_wire[wire] for wire in wires)
            for wire in wires:
                depth_at_wire[wire] = new_depth + 1
        return max(depth_at_wire, default=0)

    def draw(self) -> str:
        return draw_circuit(self)

    def __str__(self) -> str:
        return self.draw()

    def __repr__(self) -> str:
        """
        <Circuit 2 qubits, 2 classic bits, 3 gates (CX:1, H:1, MEASURE:1), depth=3>
        """
        gate_hist = {}
        for gate in self._gates:
            gate_hist[gate.name] = gate_hist.get(gate.name, 0) + 1
        gate_summary = ", ".join(f"{name}:{cnt}" for name, cnt in sorted(gate_hist.items()))

        return (
            f"<Circuit {self.qubit_count} qubits, {self.classic_bit_count} classic bits, "
            f"{len(self._gates)} gates ({gate_summary}), depth={self.depth()}>"
        )
