"""Resolve an equations file and write the value of every variable.

Usage:
    eqeval input.txt output.txt
    eqeval input.txt output.txt --strategy passes -v
"""

import argparse
import logging

from . import run
from .resolver import STRATEGIES

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Raised for a malformed command line."""
    pass


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(f"incorrect input: {message}")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="eqeval", description="Resolve variable definitions of the form 'a = b + 1'"
    )
    parser.add_argument("input", type=str, help="Definitions file, one equation per line")
    parser.add_argument("output", type=str, help="File to write 'name = value' lines to")
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="graph",
        help="Resolution strategy (default: graph)",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("eqeval").setLevel(logging.DEBUG if args.verbose else logging.WARNING)
        values = run(args.input, args.output, strategy=args.strategy)
    except Exception as e:
        logger.debug("run failed", exc_info=True)
        print(f"Fail reason: {e}")
        return 1

    logger.debug("wrote %d values to %s", len(values), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
