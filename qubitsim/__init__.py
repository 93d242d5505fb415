# -*- coding: utf-8 -*-
"""Per-qubit statevector simulator for small quantum circuits.

Qubits are independent amplitude pairs, gates are applied one after the other,
and repeated runs of a circuit are collected into outcome histograms.
"""

# Set up the logger.
from .log import get_logger
logger = get_logger(__name__)

from .__version__ import __version__
from .simulation import (
    BitState,
    CH,
    CPhase,
    CX,
    CY,
    CZ,
    Circuit,
    CircuitGate,
    CircuitSizeMismatchError,
    ClassicBit,
    ControlIsTargetError,
    ControlledGate,
    DuplicateQubitIndexError,
    H,
    INIT,
    InvalidClassicBitIndexError,
    InvalidQubitIndexError,
    InvalidQubitIndicesCountError,
    InvalidStateError,
    MEASURE,
    PRINT,
    Phase,
    ProbabilityEngine,
    QuantumGate,
    Qubit,
    QubitSimError,
    QubitState,
    RecursiveCircuitError,
    S,
    SWAP,
    SwapSameQubitError,
    T,
    Tdg,
    X,
    Y,
    Z,
)
from .results import CompoundResult, Result
