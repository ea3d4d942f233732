from __future__ import annotations

import math
from typing import Iterable, List, Optional

from .assembler import disassemble
from .core import execute
from .programs import HERON_ITERATIONS, Programs
from .registers import Registers


def heron_sqrt(x: float, iterations: int = HERON_ITERATIONS, max_steps: Optional[int] = None) -> float:
    vm = execute(Registers(r1=x, r2=iterations), Programs.heron(), output=lambda _line: None, max_steps=max_steps)
    return vm.reg.r6


def run_demo_heron(x: float, iterations: int = HERON_ITERATIONS, max_steps: Optional[int] = None, listing: bool = False) -> None:
    program = Programs.heron()
    lines: List[str] = []
    vm = execute(Registers(r1=x, r2=iterations), program, output=lines.append, max_steps=max_steps)
    out = vm.reg.r6
    print("demo=heron_sqrt")
    print(f"x={x:.16e}")
    print(f"iterations={iterations}")
    print(f"vm={out:.16e}")
    if x >= 0.0:
        py = math.sqrt(x)
        print(f"py={py:.16e}")
        print(f"abs_err={abs(out - py):.3e}")
    print(f"steps={vm.steps}")
    print(f"status={vm.status.value}")
    print(f"program_len={len(program)}")
    if listing:
        for line in disassemble(program):
            print(line)


def run_driver(values: Iterable[float], iterations: int = HERON_ITERATIONS, max_steps: Optional[int] = None) -> None:
    """Run the Heron program once per input value, printing what it prints."""
    program = Programs.heron()
    for v in values:
        execute(Registers(r1=v, r2=iterations), program, output=print, max_steps=max_steps)
