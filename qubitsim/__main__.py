# -*- coding: utf-8 -*-
"""Command-line entry point: build one of the example circuits, draw it and simulate it.

    python -m qubitsim bell --shots 10000
    python -m qubitsim teleportation --seed 7
    python -m qubitsim shor --a 7 --counting-qubits 4 --shots 200
"""

import argparse
import sys

from .config import DEFAULT_SHOTS
from .examples import bell_circuit, candidate_periods, shors_circuit, teleportation_circuit
from .log import add_console_handler, get_logger
from .simulation import ProbabilityEngine

logger = get_logger(__name__)

SUCCESS_CODE = 0
EXAMPLES = ("bell", "teleportation", "shor")


def build_parser():
    """Builds and returns a command-line argument parser.

    Returns:
        `ArgumentParser`: The command-line argument parser.

    """
    parser = argparse.ArgumentParser(prog="qubitsim", description="Run an example circuit.")
    parser.add_argument("example", choices=EXAMPLES)
    parser.add_argument("--shots", type=int, default=DEFAULT_SHOTS, help="number of simulated trials")
    parser.add_argument("--seed", type=int, default=None, help="seed for the probability engine")
    parser.add_argument("--a", type=int, default=7, help="base of a^x mod 15 (shor only)")
    parser.add_argument("--counting-qubits", type=int, default=4, help="size of the counting register (shor only)")
    parser.add_argument("--no-draw", action="store_true", help="skip the circuit drawing")
    parser.add_argument("--verbose", action="store_true", help="log debug messages to stdout")
    return parser


def build_circuit(args, engine):
    if args.example == "bell":
        return bell_circuit(engine)
    if args.example == "teleportation":
        return teleportation_circuit(engine)
    return shors_circuit(args.a, args.counting_qubits, engine=engine)


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        add_console_handler()

    engine = ProbabilityEngine(seed=args.seed)
    circuit = build_circuit(args, engine)
    if not args.no_draw:
        print(circuit)
        print()
    result = circuit.simulate(args.shots)
    print(result)
    if args.example == "shor":
        print(f"Candidate periods: {candidate_periods(result, args.counting_qubits)}")
    return SUCCESS_CODE


if __name__ == "__main__":
    sys.exit(main())
