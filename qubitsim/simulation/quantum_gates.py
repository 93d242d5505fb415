import abc
import copy
import math
import sys
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence, TextIO, Tuple, Union

import numpy as np
from attrs import frozen, field

from .qubit import QubitState
from .utilities import (
    ControlIsTargetError,
    DuplicateQubitIndexError,
    InvalidQubitIndicesCountError,
    InvalidStateError,
    SwapSameQubitError,
    as_index_tuple,
    check_classic_bit_index,
    check_qubit_index,
)
from .visualization_tools import DrawingColumn, Drawings
from ..log import get_logger

if TYPE_CHECKING:
    from .quantum import Circuit

logger = get_logger(__name__)


class QuantumGate(abc.ABC):
    """
    Base class of every operation a :class:`Circuit` can hold.

    A gate is configuration only (indices, angle, wrapped gate). Once added to a
    circuit it is never changed, only cloned and applied. Subclasses implement

    - ``apply(circuit)``: mutate the circuit's qubits / classic bits,
    - ``draw(column)``: describe the gate on a :class:`DrawingColumn`,

    and report the wires they touch through ``qubit_indices`` and
    ``classic_bit_indices`` so that :meth:`verify` can check them.
    """
    def __init__(self, name: str):
        self.name: str = name

    @property
    @abc.abstractmethod
    def qubit_indices(self) -> Tuple[int, ...]:
        """Every qubit the gate reads or writes."""

    @property
    def classic_bit_indices(self) -> Tuple[int, ...]:
        return ()

    @property
    def num_qubits(self) -> int:
        return len(self.qubit_indices)

    @abc.abstractmethod
    def apply(self, circuit: "Circuit") -> None:
        """Apply the gate to the current state of ``circuit``."""

    @abc.abstractmethod
    def draw(self, column: DrawingColumn) -> None:
        """Add the gate's boxes, markers and links to ``column``."""

    def verify(self, circuit: "Circuit") -> None:
        """Raise if any index referenced by the gate is out of range for ``circuit``."""
        for index in self.qubit_indices:
            check_qubit_index(index, circuit.qubit_count)
        for index in self.classic_bit_indices:
            check_classic_bit_index(index, circuit.classic_bit_count)

    def bind(self, circuit: "Circuit") -> None:
        """Hook called on the circuit's own copy of the gate right before verification."""

    def clone(self) -> "QuantumGate":
        return copy.copy(self)

    def sub_circuits(self) -> Iterator["Circuit"]:
        """Every circuit embedded (directly or through nested gates) in this gate."""
        return iter(())

    def get_drawings(self, circuit: "Circuit") -> Drawings:
        column = DrawingColumn(circuit.qubit_count, circuit.classic_bit_count)
        self.draw(column)
        return column.render()

    def make_controlled(self, control_index: int, is_classical: bool = False) -> "ControlledGate":
        """
        Wrap a clone of this gate so it only runs when the control reads 1.

        Args:
            control_index (int): Index of the control qubit, or of the control classic bit.
            is_classical (bool, optional): Read a classic bit instead of measuring a qubit. Defaults to False.
        """
        return ControlledGate(self.clone(), control_index, is_classical=is_classical)

    def __str__(self):
        return self.name + f" {self.qubit_indices}"

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} name='{self.name}' "
            f"qargs={self.qubit_indices} cargs={self.classic_bit_indices}>"
        )


class SingleQubitGate(QuantumGate):
    """A 2×2 unitary applied to the amplitudes of one qubit."""
    def __init__(self, qubit_index: int, name: str, matrix: np.ndarray):
        self.qubit_index: int = qubit_index
        self.gate: np.ndarray = matrix
        super().__init__(name=name)

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return (self.qubit_index,)

    def transform(self, state: QubitState) -> None:
        alpha, beta = self.gate @ state.vector()
        state.set(alpha, beta)

    def apply(self, circuit: "Circuit") -> None:
        self.transform(circuit.qubits[self.qubit_index].state)

    def draw(self, column: DrawingColumn) -> None:
        column.box(column.qubit_wire(self.qubit_index), self.name)


class H(SingleQubitGate):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, "H", 1 / np.sqrt(2) * np.array([[1.0, 1.0], [1.0, -1.0]], dtype=complex))


class X(SingleQubitGate):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, "X", np.array([[0.0, 1.0], [1.0, 0.0]], dtype=complex))


class Y(SingleQubitGate):
    # the |1⟩ amplitude picks up the sign: (α, β) -> (β, -α)
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, "Y", np.array([[0.0, 1.0], [-1.0, 0.0]], dtype=complex))


class Z(SingleQubitGate):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, "Z", np.array([[1.0, 0.0], [0.0, -1.0]], dtype=complex))


class Phase(SingleQubitGate):
    """Phase shift  (α, β) -> (α, β·e^{iθ})."""
    def __init__(self, qubit_index: int, angle: float, name: Optional[str] = None):
        self.param: float = float(angle)
        super().__init__(
            qubit_index,
            name or f"P({self.param:.3g})",
            np.array([[1.0, 0.0], [0.0, np.exp(1j * self.param)]], dtype=complex),
        )


class S(Phase):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, math.pi / 2, name="S")


class T(Phase):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, math.pi / 4, name="T")


class Tdg(Phase):
    def __init__(self, qubit_index: int):
        super().__init__(qubit_index, -math.pi / 4, name="Tdg")


class SWAP(QuantumGate):
    def __init__(self, qubit_index_1: int, qubit_index_2: int):
        self.qubit_index_1: int = qubit_index_1
        self.qubit_index_2: int = qubit_index_2
        super().__init__(name="SWAP")

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return (self.qubit_index_1, self.qubit_index_2)

    def verify(self, circuit: "Circuit") -> None:
        if self.qubit_index_1 == self.qubit_index_2:
            raise SwapSameQubitError(self.qubit_index_1)
        super().verify(circuit)

    def apply(self, circuit: "Circuit") -> None:
        first = circuit.qubits[self.qubit_index_1]
        second = circuit.qubits[self.qubit_index_2]
        saved = first.state.copy()
        first.set_state(second.state)
        second.set_state(saved)

    def draw(self, column: DrawingColumn) -> None:
        wires = [column.qubit_wire(index) for index in self.qubit_indices]
        for wire in wires:
            column.marker(wire, "x")
        column.link(wires)


@frozen
class MeasurePair:
    """One (qubit, classic bit) reference. Indices are range-checked by MEASURE.verify."""
    qubit_index: int = field()
    classic_bit_index: int = field()


def _to_measure_pairs(pairs) -> Tuple[MeasurePair, ...]:
    result = []
    for pair in pairs:
        if isinstance(pair, MeasurePair):
            result.append(pair)
        else:
            qubit_index, classic_bit_index = pair
            result.append(MeasurePair(qubit_index, classic_bit_index))
    return tuple(result)


class MEASURE(QuantumGate):
    """
    Measure qubits into classic bits.

    Each (qubit, classic bit) pair is measured in the listed order with its own
    random draw; the qubit collapses to the observed basis state.
    """
    def __init__(self, pairs: Iterable[Union[MeasurePair, Tuple[int, int]]]):
        self.pairs: Tuple[MeasurePair, ...] = _to_measure_pairs(pairs)
        if not self.pairs:
            raise ValueError("MEASURE needs at least one (qubit, classic bit) pair")
        super().__init__(name="MEASURE")

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return tuple(pair.qubit_index for pair in self.pairs)

    @property
    def classic_bit_indices(self) -> Tuple[int, ...]:
        return tuple(pair.classic_bit_index for pair in self.pairs)

    def apply(self, circuit: "Circuit") -> None:
        for pair in self.pairs:
            outcome = circuit.qubits[pair.qubit_index].measure()
            circuit.classic_bits[pair.classic_bit_index].set_state(outcome)

    def draw(self, column: DrawingColumn) -> None:
        for pair in self.pairs:
            qubit_wire = column.qubit_wire(pair.qubit_index)
            classic_wire = column.classic_wire(pair.classic_bit_index)
            column.box(qubit_wire, "M")
            column.marker(classic_wire, "v")
            column.link([qubit_wire, classic_wire])


class ControlledGate(QuantumGate):
    """
    Runs a wrapped gate only when its control reads 1.

    A quantum control is read by measuring the control qubit, which collapses
    it; a classical control reads the stored classic bit. Any gate can be
    wrapped, including circuit gates and other controlled gates.

    Args:
        gate (QuantumGate): The wrapped gate. The controlled gate owns it.
        control_index (int): Index of the control qubit (or classic bit when ``is_classical``).
        is_classical (bool, optional): Control on a classic bit. Defaults to False.
        name (str, optional): Display name. Defaults to ``"C" + gate.name``.
    """
    def __init__(self, gate: QuantumGate, control_index: int, is_classical: bool = False, name: Optional[str] = None):
        self.gate: QuantumGate = gate
        self.control_index: int = control_index
        self.is_classical: bool = is_classical
        super().__init__(name=name or f"C{gate.name}")

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        if self.is_classical:
            return self.gate.qubit_indices
        return (self.control_index,) + self.gate.qubit_indices

    @property
    def classic_bit_indices(self) -> Tuple[int, ...]:
        if self.is_classical:
            return (self.control_index,) + self.gate.classic_bit_indices
        return self.gate.classic_bit_indices

    def bind(self, circuit: "Circuit") -> None:
        self.gate.bind(circuit)

    def verify(self, circuit: "Circuit") -> None:
        if self.is_classical:
            check_classic_bit_index(self.control_index, circuit.classic_bit_count)
        else:
            check_qubit_index(self.control_index, circuit.qubit_count)
        self.gate.verify(circuit)
        if not self.is_classical and self.control_index in self.gate.qubit_indices:
            raise ControlIsTargetError(self.control_index)

    def control_value(self, circuit: "Circuit") -> bool:
        if self.is_classical:
            return bool(circuit.classic_bits[self.control_index])
        return bool(circuit.qubits[self.control_index].measure())

    def apply(self, circuit: "Circuit") -> None:
        if self.control_value(circuit):
            self.gate.apply(circuit)

    def clone(self) -> "ControlledGate":
        duplicate = copy.copy(self)
        duplicate.gate = self.gate.clone()
        return duplicate

    def sub_circuits(self) -> Iterator["Circuit"]:
        return self.gate.sub_circuits()

    def draw(self, column: DrawingColumn) -> None:
        self.gate.draw(column)
        if self.is_classical:
            control_wire = column.classic_wire(self.control_index)
        else:
            control_wire = column.qubit_wire(self.control_index)
        column.marker(control_wire, "*")
        wires = [column.qubit_wire(index) for index in self.gate.qubit_indices]
        wires += [column.classic_wire(index) for index in self.gate.classic_bit_indices]
        column.link([control_wire] + wires)


class CH(ControlledGate):
    def __init__(self, control_index: int, target_index: int):
        super().__init__(H(target_index), control_index, name="CH")


class CX(ControlledGate):
    def __init__(self, control_index: int, target_index: int):
        super().__init__(X(target_index), control_index, name="CX")


class CY(ControlledGate):
    def __init__(self, control_index: int, target_index: int):
        super().__init__(Y(target_index), control_index, name="CY")


class CZ(ControlledGate):
    def __init__(self, control_index: int, target_index: int):
        super().__init__(Z(target_index), control_index, name="CZ")


class CPhase(ControlledGate):
    def __init__(self, control_index: int, target_index: int, angle: float):
        super().__init__(Phase(target_index, angle), control_index, name="CPhase")

    @property
    def param(self) -> float:
        return self.gate.param


class CircuitGate(QuantumGate):
    """
    A whole sub-circuit used as one gate.

    ``qubit_indices[k]`` is the parent qubit wired to qubit ``k`` of the
    sub-circuit. Applying the gate resets the sub-circuit, copies the mapped
    parent states in, runs the sub-circuit program once and copies the final
    states back out. The sub-circuit is shared, not copied, so one circuit can
    back several gates in several parents.
    """
    def __init__(self, circuit: "Circuit", qubit_indices: Optional[Sequence[int]] = None, name: Optional[str] = None):
        self.circuit: "Circuit" = circuit
        self._qubit_indices: Optional[Tuple[int, ...]] = None
        super().__init__(name=name or "U")
        if qubit_indices is not None:
            self.set_qubit_indices(qubit_indices)

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return self._qubit_indices or ()

    @property
    def is_initialized(self) -> bool:
        return self._qubit_indices is not None

    def set_qubit_indices(self, qubit_indices: Sequence[int]) -> None:
        indices = as_index_tuple(qubit_indices)
        if len(indices) != self.circuit.qubit_count:
            raise InvalidQubitIndicesCountError(len(indices), self.circuit.qubit_count)
        if len(set(indices)) != len(indices):
            raise DuplicateQubitIndexError(indices)
        self._qubit_indices = indices

    def bind(self, circuit: "Circuit") -> None:
        if not self.is_initialized:
            logger.warning(
                f"Circuit gate '{self.name}' was added without qubit indices; "
                f"mapping it onto qubits 0..{self.circuit.qubit_count - 1}"
            )
            self.set_qubit_indices(range(self.circuit.qubit_count))

    def verify(self, circuit: "Circuit") -> None:
        if not self.is_initialized:
            raise InvalidQubitIndicesCountError(0, self.circuit.qubit_count)
        super().verify(circuit)

    def apply(self, circuit: "Circuit") -> None:
        sub_circuit = self.circuit
        sub_circuit.reset()
        for sub_index, parent_index in enumerate(self._qubit_indices):
            sub_circuit.qubits[sub_index].set_state(circuit.qubits[parent_index].state)
        sub_circuit.execute()
        for sub_index, parent_index in enumerate(self._qubit_indices):
            circuit.qubits[parent_index].set_state(sub_circuit.qubits[sub_index].state)

    def sub_circuits(self) -> Iterator["Circuit"]:
        yield self.circuit
        for gate in self.circuit.gates:
            yield from gate.sub_circuits()

    def draw(self, column: DrawingColumn) -> None:
        wires = []
        for sub_index, parent_index in enumerate(self.qubit_indices):
            wire = column.qubit_wire(parent_index)
            column.box(wire, f"{self.name} [{sub_index}]")
            wires.append(wire)
        column.link(wires)


class INIT(QuantumGate):
    """Force a qubit into the given state, whatever it held before."""
    def __init__(self, qubit_index: int, state: Union[QubitState, Tuple[complex, complex]]):
        if isinstance(state, QubitState):
            alpha, beta = state.alpha, state.beta
        else:
            alpha, beta = (complex(value) for value in state)
        self.qubit_index: int = qubit_index
        self.amplitudes: Tuple[complex, complex] = (alpha, beta)
        super().__init__(name="INIT")

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return (self.qubit_index,)

    def verify(self, circuit: "Circuit") -> None:
        super().verify(circuit)
        alpha, beta = self.amplitudes
        if not circuit.engine.compare(abs(alpha) ** 2 + abs(beta) ** 2, 1.0):
            raise InvalidStateError(alpha, beta)

    def apply(self, circuit: "Circuit") -> None:
        circuit.qubits[self.qubit_index].set_state(*self.amplitudes)

    def draw(self, column: DrawingColumn) -> None:
        column.box(column.qubit_wire(self.qubit_index), "Init")


class PRINT(QuantumGate):
    """Diagnostic gate: writes the qubit's current state to ``sink`` (stdout by default)."""
    def __init__(self, qubit_index: int, sink: Optional[TextIO] = None):
        self.qubit_index: int = qubit_index
        self.sink: Optional[TextIO] = sink
        super().__init__(name="PRINT")

    @property
    def qubit_indices(self) -> Tuple[int, ...]:
        return (self.qubit_index,)

    def apply(self, circuit: "Circuit") -> None:
        state = circuit.qubits[self.qubit_index].state
        logger.debug(f"q{self.qubit_index}: {state}")
        print(f"q{self.qubit_index}: {state}", file=self.sink or sys.stdout)

    def draw(self, column: DrawingColumn) -> None:
        column.box(column.qubit_wire(self.qubit_index), "Print")
