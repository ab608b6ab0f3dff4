"""
plonk-dsl - command-line entry point.

Sub-commands:
    compile  Write the JSON gate listing of a circuit
    check    Supply values and report gates that do not hold
    inputs   Print the ordered public-input vector for given values

Run with:
    plonkdsl compile circuit.plonk
    plonkdsl check circuit.plonk --val a=1 --val b=1 --val c=2
    python -m plonkdsl.main inputs circuit.plonk --val c=2
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import CompilerConfig, load_config
from .errors import PlonkDslError
from .runner import describe_failures, parse_assignment, run_check, run_compile
from .utils import setup_basic_logger

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNSATISFIED = 1
EXIT_ERROR = 2


def _assignment(text: str):
    try:
        return parse_assignment(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="plonkdsl",
        description="Compile arithmetic equations into Plonk gates.",
    )
    p.add_argument(
        "--config",
        "-c",
        default=None,
        help="Optional JSON config file to override defaults.",
    )
    p.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log pipeline steps (debug level).",
    )
    sub = p.add_subparsers(dest="command", required=True)

    compile_p = sub.add_parser("compile", help="Write the gate listing of a circuit.")
    compile_p.add_argument("circuit", help="Path to the equation source.")
    compile_p.add_argument(
        "--output",
        "-o",
        default=None,
        help="Listing path. Default: circuit path plus the configured suffix.",
    )

    for name, help_text in (
        ("check", "Supply values and check every gate."),
        ("inputs", "Print the ordered public-input vector."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("circuit", help="Path to the equation source.")
        cmd.add_argument(
            "--val",
            dest="vals",
            action="append",
            default=[],
            type=_assignment,
            metavar="NAME=VALUE",
            help="Value of a witness or public input (repeatable).",
        )
    return p


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else CompilerConfig()
        setup_basic_logger("plonkdsl", logging.DEBUG if args.verbose else cfg.logging_level)

        if args.command == "compile":
            out = run_compile(args.circuit, args.output, cfg)
            print(out)
            return EXIT_OK

        circuit, lowered = run_check(args.circuit, args.vals, cfg)
        if args.command == "inputs":
            for name, value in circuit.variables.public_inputs():
                print(f"{name}={value.to_signed()}")
            return EXIT_OK

        failures = describe_failures(circuit, lowered)
        for line in failures:
            print(f"unsatisfied: {line}")
        if failures:
            return EXIT_UNSATISFIED
        print(f"ok: {len(lowered.gates)} gate(s) satisfied")
        return EXIT_OK
    except (PlonkDslError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
