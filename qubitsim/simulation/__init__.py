from .utilities import (
    QubitSimError,
    InvalidQubitIndexError,
    InvalidClassicBitIndexError,
    InvalidStateError,
    SwapSameQubitError,
    ControlIsTargetError,
    InvalidQubitIndicesCountError,
    CircuitSizeMismatchError,
    DuplicateQubitIndexError,
    RecursiveCircuitError,
)
from .probability import ProbabilityEngine
from .classic_bit import BitState, ClassicBit
from .qubit import Qubit, QubitState
from .quantum_gates import (
    QuantumGate,
    SingleQubitGate,
    H,
    X,
    Y,
    Z,
    Phase,
    S,
    T,
    Tdg,
    SWAP,
    MEASURE,
    MeasurePair,
    ControlledGate,
    CH,
    CX,
    CY,
    CZ,
    CPhase,
    CircuitGate,
    INIT,
    PRINT,
)
from .quantum import Circuit
