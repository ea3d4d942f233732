#!/usr/bin/env python3

from __future__ import annotations

import math

from regvm.core import execute
from regvm.demos import heron_sqrt
from regvm.programs import HERON_ITERATIONS, Programs
from regvm.registers import Registers


def test_heron_sqrt_converges() -> None:
    for x, want in [(4.0, 2.0), (2.0, 1.41421356), (9.0, 3.0), (0.25, 0.5)]:
        got = heron_sqrt(x, iterations=HERON_ITERATIONS)
        assert abs(got - want) < 1e-6, (x, got)


def test_heron_prints_result_once() -> None:
    lines = []
    vm = execute(Registers(r1=2.0, r2=10), Programs.heron(), output=lines.append)
    assert len(lines) == 1
    assert float(lines[0]) == vm.reg.r6
    assert abs(float(lines[0]) - math.sqrt(2.0)) < 1e-12
    assert vm.reg.r1 == 2.0
    assert vm.reg.r3 == 10.0


def test_heron_program_shared_between_runs() -> None:
    program = Programs.heron()
    before = list(program)
    outs = []
    for x in (4.0, 16.0, 2.0):
        execute(Registers(r1=x, r2=10), program, output=outs.append)
    assert list(program) == before
    assert [round(float(s), 9) for s in outs] == [2.0, 4.0, round(math.sqrt(2.0), 9)]


def main() -> None:
    test_heron_sqrt_converges()
    test_heron_prints_result_once()
    test_heron_program_shared_between_runs()
    print("selftest: PASS")


if __name__ == "__main__":
    main()
