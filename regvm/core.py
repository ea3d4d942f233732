from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Optional, Sequence

from .assembler import Program
from .errors import InvalidOperandError, StepLimitExceeded
from .isa import ARITH_OPS, LOGIC_OPS, Instruction, Operand, OperandKind, Operator
from .registers import Registers
from .utils import bool_to_float, float_to_bool, format_value

logger = logging.getLogger(__name__)

OutputSink = Callable[[str], None]


class ExitStatus(Enum):
    RUNNING = "running"
    HALTED = "halted"
    JUMP_OUT_OF_RANGE = "jump_out_of_range"


class VM:
    DEFAULT_MAX_STEPS: Optional[int] = None

    def __init__(
        self,
        program: Sequence[Instruction],
        registers: Optional[Registers] = None,
        output: Optional[OutputSink] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        self.program: Program = tuple(program)
        self.reg = registers.copy() if registers is not None else Registers()
        self.output: OutputSink = output if output is not None else print
        self.max_steps = max_steps if max_steps is not None else self.DEFAULT_MAX_STEPS
        self.pc = 0
        self.steps = 0
        self.status = ExitStatus.RUNNING

    @property
    def halted(self) -> bool:
        return self.status is not ExitStatus.RUNNING

    def _read(self, operand: Operand) -> float:
        if operand.kind is OperandKind.REGISTER:
            return self.reg.read(operand.register)
        if operand.kind is OperandKind.FLOAT:
            return operand.value
        raise InvalidOperandError(f"cannot read a value from {operand.kind.value} operand", self.pc)

    def _write(self, operand: Operand, value: float) -> None:
        if operand.kind is not OperandKind.REGISTER:
            raise InvalidOperandError(f"cannot write to {operand.kind.value} operand", self.pc)
        self.reg.write(operand.register, value)

    def _jump_target(self, operand: Operand) -> int:
        if operand.kind is not OperandKind.INDEX:
            raise InvalidOperandError(f"jump target must be an index, got {operand.kind.value}", self.pc)
        return operand.index

    def _jump(self, target: int) -> None:
        if target < 0 or target > len(self.program):
            logger.warning("jump from %04d to %d outside program of length %d", self.pc, target, len(self.program))
            self.status = ExitStatus.JUMP_OUT_OF_RANGE
            return
        self.pc = target

    def _arith(self, op: Operator, src: Operand, dst: Operand) -> None:
        v1 = self._read(src)
        v2 = self._read(dst)
        if op is Operator.ADD:
            out = v2 + v1
        elif op is Operator.SUB:
            out = v2 - v1
        elif op is Operator.MUL:
            out = v2 * v1
        else:
            out = _ieee_div(v2, v1)
        self._write(dst, out)

    def _logic(self, op: Operator, src: Operand, dst: Operand) -> None:
        v1 = self._read(src)
        if op is Operator.NOT:
            # destination is overwritten without being read
            self._write(dst, bool_to_float(not float_to_bool(v1)))
            return
        v2 = self._read(dst)
        if op is Operator.LESS:
            out = v2 < v1
        elif op is Operator.EQUAL:
            out = v2 == v1
        elif op is Operator.AND:
            out = float_to_bool(v1) and float_to_bool(v2)
        else:
            out = float_to_bool(v1) or float_to_bool(v2)
        self._write(dst, bool_to_float(out))

    def step(self) -> None:
        if self.halted:
            return
        if self.pc >= len(self.program):
            self.status = ExitStatus.HALTED
            return
        ins = self.program[self.pc]
        logger.debug("exec %04d  %s", self.pc, ins)
        self.steps += 1
        op, src, dst = ins.op, ins.src, ins.dst

        if op is Operator.JMP:
            target = src if src.kind is OperandKind.INDEX else dst
            self._jump(self._jump_target(target))
            return
        if op is Operator.JMF or op is Operator.JMT:
            target = self._jump_target(dst)
            truthy = float_to_bool(self._read(src))
            if truthy == (op is Operator.JMT):
                self._jump(target)
            else:
                self.pc += 1
            return

        if op in ARITH_OPS:
            self._arith(op, src, dst)
        elif op in LOGIC_OPS:
            self._logic(op, src, dst)
        elif op is Operator.MOV:
            self._write(dst, self._read(src))
        elif op is Operator.PRN:
            self.output(format_value(self._read(src)))
        elif op is Operator.NOP:
            pass
        else:
            raise ValueError(f"unknown op: {op}")
        self.pc += 1

    def run(self) -> Registers:
        while not self.halted:
            if self.max_steps is not None and self.steps >= self.max_steps and self.pc < len(self.program):
                raise StepLimitExceeded(f"program did not halt within {self.max_steps} steps", self.pc)
            self.step()
        logger.debug("stopped: status=%s steps=%d", self.status.value, self.steps)
        return self.reg


def _ieee_div(a: float, b: float) -> float:
    # x / 0.0 follows IEEE 754 instead of raising ZeroDivisionError
    if b != 0.0:
        return a / b
    if math.isnan(a) or a == 0.0:
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def execute(
    initial: Registers,
    program: Sequence[Instruction],
    output: Optional[OutputSink] = None,
    max_steps: Optional[int] = None,
) -> VM:
    vm = VM(program, initial, output=output, max_steps=max_steps)
    vm.run()
    return vm


def run(
    initial: Registers,
    program: Sequence[Instruction],
    output: Optional[OutputSink] = None,
    max_steps: Optional[int] = None,
) -> Registers:
    return execute(initial, program, output=output, max_steps=max_steps).reg
