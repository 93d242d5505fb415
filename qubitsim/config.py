"""Package-wide defaults, overridable from the environment.

    QUBITSIM_SEED          integer seed for probability engines built without one
    QUBITSIM_ERROR_MARGIN  tolerance used when checking amplitude normalization
"""
import os
from typing import Optional

DEFAULT_ERROR_MARGIN: float = 2e-10
DEFAULT_SHOTS: int = 1000


def default_error_margin() -> float:
    value = os.getenv("QUBITSIM_ERROR_MARGIN")
    if value is None or value == "":
        return DEFAULT_ERROR_MARGIN
    margin = float(value)
    if margin <= 0:
        raise ValueError(f"QUBITSIM_ERROR_MARGIN must be positive, got {value!r}")
    return margin


def default_seed() -> Optional[int]:
    value = os.getenv("QUBITSIM_SEED")
    if value is None or value == "":
        return None
    return int(value)
