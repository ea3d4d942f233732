from __future__ import annotations

from .assembler import Assembler, Program
from .isa import Operand, Operator, Register

HERON_ITERATIONS = 10


class Programs:
    @staticmethod
    def heron() -> Program:
        """Square root by Heron's method.

        Inputs:  R1 - value to take the square root of
                 R2 - number of iterations
        Output:  R6 - approximation, also printed once at the end
        Scratch: R3 - iteration counter, R4 - loop-exit flag, R5 - estimate
        """
        asm = Assembler()
        asm.emit(Operator.MOV, Operand.val(1), Register.R5)
        asm.emit(Operator.MOV, Operand.val(0), Register.R3)
        iter_start = asm.pos()
        asm.emit(Operator.MOV, Register.R3, Register.R4)
        asm.emit(Operator.EQUAL, Register.R2, Register.R4)
        if_done = asm.reserve_slot()
        asm.emit(Operator.MOV, Register.R1, Register.R6)
        asm.emit(Operator.DIV, Register.R5, Register.R6)
        asm.emit(Operator.ADD, Register.R5, Register.R6)
        asm.emit(Operator.MUL, Operand.val(0.5), Register.R6)
        asm.emit(Operator.MOV, Register.R6, Register.R5)
        asm.emit(Operator.ADD, Operand.val(1), Register.R3)
        asm.emit(Operator.JMP, Operand.idx(iter_start))
        loop_end = asm.pos()
        asm.patch(if_done, Operator.JMT, Register.R4, Operand.idx(loop_end))
        asm.emit(Operator.PRN, Register.R6)
        return asm.finish()


PROGRAMS = {
    "heron": Programs.heron,
}
