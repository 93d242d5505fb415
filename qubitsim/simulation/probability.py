import threading
from typing import Optional

import numpy as np

from ..config import default_error_margin, default_seed


class ProbabilityEngine:
    """Source of uniform random draws shared by every qubit of a circuit.

    The generator is seeded once, at construction, either from ``seed``, from the
    ``QUBITSIM_SEED`` environment variable, or from fresh OS entropy. Draws are
    serialized through a lock so the engine can be shared across threads.

    Args:
        error_margin (float, optional): Tolerance used by :meth:`compare`. Defaults to 2e-10.
        seed (int, optional): Seed for the underlying numpy generator.
    """
    def __init__(self, error_margin: Optional[float] = None, seed: Optional[int] = None):
        if error_margin is None:
            error_margin = default_error_margin()
        if error_margin <= 0:
            raise ValueError(f"error_margin must be positive, got {error_margin}")
        if seed is None:
            seed = default_seed()
        self.error_margin: float = float(error_margin)
        self.seed: Optional[int] = seed
        self._rng = np.random.default_rng(seed)
        self._lock = threading.Lock()

    def get_probability(self) -> float:
        """Returns a uniform draw from [0, 1)."""
        with self._lock:
            return float(self._rng.random())

    def compare(self, number1, number2) -> bool:
        return abs(number1 - number2) < self.error_margin

    def __repr__(self) -> str:
        return f"ProbabilityEngine(error_margin={self.error_margin!r}, seed={self.seed!r})"
