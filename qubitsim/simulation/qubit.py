import cmath
import math
from typing import Optional

import numpy as np
from attrs import define, field

from .classic_bit import ClassicBit, BitState
from .probability import ProbabilityEngine
from .utilities import InvalidStateError, format_amplitude


@define(eq=False)
class QubitState:
    """
    Amplitudes of a single qubit,  |ψ⟩ = α|0⟩ + β|1⟩.

    Every construction and every :meth:`set` checks |α|² + |β|² ≈ 1 within the
    engine's error margin and raises :class:`InvalidStateError` otherwise; a
    rejected :meth:`set` leaves the previous amplitudes in place.
    """
    engine: ProbabilityEngine = field(repr=False)
    _alpha: complex = field(default=1.0 + 0.0j, converter=complex)
    _beta: complex = field(default=0.0j, converter=complex)

    def __attrs_post_init__(self):
        self._assert_valid(self._alpha, self._beta)

    @classmethod
    def random(cls, engine: ProbabilityEngine) -> "QubitState":
        """Random state: independent |0⟩ weight and independent phases for both amplitudes."""
        p0 = engine.get_probability()
        phase_alpha = 2 * math.pi * engine.get_probability()
        phase_beta = 2 * math.pi * engine.get_probability()
        alpha = math.sqrt(p0) * cmath.exp(1j * phase_alpha)
        beta = math.sqrt(1.0 - p0) * cmath.exp(1j * phase_beta)
        return cls(engine, alpha, beta)

    def _assert_valid(self, alpha: complex, beta: complex) -> None:
        if not self.engine.compare(abs(alpha) ** 2 + abs(beta) ** 2, 1.0):
            raise InvalidStateError(alpha, beta)

    def set(self, alpha, beta) -> None:
        alpha, beta = complex(alpha), complex(beta)
        self._assert_valid(alpha, beta)
        self._alpha = alpha
        self._beta = beta

    @property
    def alpha(self) -> complex:
        return self._alpha

    @property
    def beta(self) -> complex:
        return self._beta

    @property
    def prob_0(self) -> float:
        return abs(self._alpha) ** 2

    @property
    def prob_1(self) -> float:
        return abs(self._beta) ** 2

    def vector(self) -> np.ndarray:
        return np.array([self._alpha, self._beta], dtype=complex)

    def copy(self) -> "QubitState":
        return QubitState(self.engine, self._alpha, self._beta)

    def isclose(self, other: "QubitState", tolerance: Optional[float] = None) -> bool:
        """Amplitude-wise comparison (no global-phase equivalence)."""
        tol = self.engine.error_margin if tolerance is None else tolerance
        return abs(self._alpha - other.alpha) < tol and abs(self._beta - other.beta) < tol

    def __eq__(self, other):
        if not isinstance(other, QubitState):
            return NotImplemented
        return self._alpha == other.alpha and self._beta == other.beta

    def __str__(self) -> str:
        return f"{format_amplitude(self._alpha)}|0⟩ + {format_amplitude(self._beta)}|1⟩"


class Qubit:
    """A qubit holding its own :class:`QubitState` and drawing from a shared engine."""
    def __init__(self, engine: ProbabilityEngine, state: Optional[QubitState] = None):
        self.engine = engine
        self._state = QubitState(engine) if state is None else QubitState(engine, state.alpha, state.beta)

    @property
    def state(self) -> QubitState:
        return self._state

    def set_state(self, alpha, beta=None) -> None:
        """Overwrite the amplitudes, either from a :class:`QubitState` or from an (alpha, beta) pair."""
        if beta is None:
            if not isinstance(alpha, QubitState):
                raise TypeError(f"set_state expects a QubitState or two amplitudes, got {alpha!r}")
            alpha, beta = alpha.alpha, alpha.beta
        self._state.set(alpha, beta)

    def reset(self) -> None:
        self._state.set(1.0, 0.0)

    def measure(self) -> ClassicBit:
        """Measure the qubit in the computational basis.

        WARNING: destructive. The qubit collapses to |0⟩ or |1⟩ according to the outcome.
        """
        if self.engine.get_probability() < self._state.prob_0:
            self._state.set(1.0, 0.0)
            return ClassicBit(BitState.ZERO)
        self._state.set(0.0, 1.0)
        return ClassicBit(BitState.ONE)

    def copy(self) -> "Qubit":
        return Qubit(self.engine, self._state)

    def __str__(self) -> str:
        return str(self._state)

    def __repr__(self) -> str:
        return f"<Qubit {self._state}>"
