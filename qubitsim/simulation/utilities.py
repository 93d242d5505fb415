import numbers
from typing import Iterable, Tuple


class QubitSimError(Exception):
    """Base class for every error raised by the simulator."""


class InvalidQubitIndexError(QubitSimError, IndexError):
    def __init__(self, index, qubit_count):
        self.index = index
        self.qubit_count = qubit_count
        super().__init__(
            f"Invalid qubit index {index} (circuit has {qubit_count} qubits)"
        )


class InvalidClassicBitIndexError(QubitSimError, IndexError):
    def __init__(self, index, classic_bit_count):
        self.index = index
        self.classic_bit_count = classic_bit_count
        super().__init__(
            f"Invalid classic bit index {index} (circuit has {classic_bit_count} classic bits)"
        )


class InvalidStateError(QubitSimError, ValueError):
    def __init__(self, alpha, beta):
        self.alpha = alpha
        self.beta = beta
        norm = abs(alpha) ** 2 + abs(beta) ** 2
        super().__init__(
            f"Invalid qubit state: {format_amplitude(alpha)}|0⟩ + {format_amplitude(beta)}|1⟩ "
            f"(|alpha|^2 + |beta|^2 = {norm!r}, expected 1)"
        )


class SwapSameQubitError(QubitSimError, ValueError):
    def __init__(self, index):
        self.index = index
        super().__init__(f"Cannot swap qubit {index} with itself")


class ControlIsTargetError(QubitSimError, ValueError):
    def __init__(self, index):
        self.index = index
        super().__init__(f"Control qubit {index} is also a target of the controlled gate")


class InvalidQubitIndicesCountError(QubitSimError, ValueError):
    def __init__(self, given, expected):
        self.given = given
        self.expected = expected
        super().__init__(
            f"Circuit gate needs exactly {expected} qubit indices, got {given}"
        )


class CircuitSizeMismatchError(QubitSimError, ValueError):
    def __init__(self, target_sizes: Tuple[int, int], other_sizes: Tuple[int, int]):
        self.target_sizes = target_sizes
        self.other_sizes = other_sizes
        super().__init__(
            "Cannot append a circuit with {} qubits / {} classic bits "
            "to a circuit with {} qubits / {} classic bits".format(*other_sizes, *target_sizes)
        )


class DuplicateQubitIndexError(QubitSimError, ValueError):
    def __init__(self, indices):
        self.indices = tuple(indices)
        super().__init__(f"Qubit indices must not repeat, got {self.indices}")


class RecursiveCircuitError(QubitSimError, ValueError):
    def __init__(self):
        super().__init__("A circuit cannot contain a gate that embeds the circuit itself")


def _is_index(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def check_qubit_index(index, qubit_count):
    if not _is_index(index) or not 0 <= index < qubit_count:
        raise InvalidQubitIndexError(index, qubit_count)


def check_classic_bit_index(index, classic_bit_count):
    if not _is_index(index) or not 0 <= index < classic_bit_count:
        raise InvalidClassicBitIndexError(index, classic_bit_count)


def format_amplitude(value: complex, digits: int = 3) -> str:
    """Compact rendering of a complex amplitude: ``1``, ``-0.707``, ``0.5i``, ``(0.5+0.5i)``."""
    value = complex(value)
    real = round(value.real, digits) + 0.0
    imag = round(value.imag, digits) + 0.0
    if imag == 0:
        return f"{real:g}"
    if real == 0:
        return f"{imag:g}i"
    sign = "+" if imag > 0 else "-"
    return f"({real:g}{sign}{abs(imag):g}i)"


def as_index_tuple(indices: Iterable[int]) -> Tuple[int, ...]:
    if isinstance(indices, int):
        return (indices,)
    return tuple(indices)
