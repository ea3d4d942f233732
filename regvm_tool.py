#!/usr/bin/env python3

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from regvm.assembler import assemble_text, disassemble
from regvm.core import execute
from regvm.errors import VMError
from regvm.isa import Register
from regvm.programs import PROGRAMS
from regvm.registers import Registers


def parse_assignments(items: List[str]) -> Registers:
    values: Dict[Register, float] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        if not sep or name.upper() not in Register.__members__:
            raise VMError(f"bad register assignment: {item!r} (want R1..R6=<number>)")
        try:
            values[Register[name.upper()]] = float(raw)
        except ValueError:
            raise VMError(f"bad register value: {item!r}") from None
    return Registers.from_mapping(values)


def cmd_list(program_name: str) -> None:
    for line in disassemble(PROGRAMS[program_name]()):
        print(line)


def cmd_run(input_path: Path, assignments: List[str], max_steps: Optional[int], dump_regs: bool) -> None:
    program = assemble_text(input_path.read_text(encoding="utf-8"))
    vm = execute(parse_assignments(assignments), program, output=print, max_steps=max_steps)
    if dump_regs:
        for name, value in vm.reg.as_dict().items():
            print(f"{name}={value!r}")
        print(f"steps={vm.steps}")
        print(f"status={vm.status.value}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="regvm asm/listing tool")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_list = sub.add_parser("list", help="print the listing of a built-in program")
    p_list.add_argument("--program", choices=sorted(PROGRAMS), default="heron")

    p_run = sub.add_parser("run", help="assemble a text program and run it")
    p_run.add_argument("input", type=Path)
    p_run.add_argument("--set", dest="assignments", action="append", default=[], metavar="RN=VALUE")
    p_run.add_argument("--max-steps", type=int, default=None)
    p_run.add_argument("--regs", action="store_true", help="print final registers")

    args = parser.parse_args(argv)
    try:
        if args.cmd == "list":
            cmd_list(args.program)
        else:
            cmd_run(args.input, args.assignments, args.max_steps, args.regs)
    except VMError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
