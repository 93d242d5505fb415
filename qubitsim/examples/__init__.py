from .basic_circuit import bell_circuit
from .teleportation import teleportation_circuit
from .shors_algorithm import candidate_periods, inverse_qft_circuit, shors_algorithm, shors_circuit, u_gate
