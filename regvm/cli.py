from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from .assembler import disassemble
from .demos import run_demo_heron, run_driver
from .errors import VMError
from .programs import HERON_ITERATIONS, Programs


def read_values(stream: TextIO) -> Iterator[float]:
    for tok in stream.read().split():
        try:
            yield float(tok)
        except ValueError:
            raise VMError(f"not a number: {tok!r}") from None


def _setup_logging(verbose: int) -> None:
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="six-register floating-point VM")
    parser.add_argument("--demo", choices=["stdin", "heron"], default="stdin", help="stdin: run heron once per number read from stdin")
    parser.add_argument("--x", type=float, default=2.0, help="for heron demo")
    parser.add_argument("--iterations", type=int, default=HERON_ITERATIONS, help="heron iteration count (loaded into R2)")
    parser.add_argument("--max-steps", type=int, default=None, help="abort a run after this many instructions")
    parser.add_argument("--list", action="store_true", help="print the program listing")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)
    try:
        if args.demo == "heron":
            run_demo_heron(args.x, iterations=args.iterations, max_steps=args.max_steps, listing=args.list)
        else:
            if args.list:
                for line in disassemble(Programs.heron()):
                    print(line)
            run_driver(read_values(sys.stdin), iterations=args.iterations, max_steps=args.max_steps)
    except VMError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
