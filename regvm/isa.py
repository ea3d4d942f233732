from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Union

from .errors import InvalidOperandError


class Register(Enum):
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6


class Operator(Enum):
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    DIV = "DIV"
    LESS = "LESS"
    EQUAL = "EQUAL"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    MOV = "MOV"
    JMT = "JMT"
    JMF = "JMF"
    JMP = "JMP"
    PRN = "PRN"
    NOP = "NOP"


ARITH_OPS: FrozenSet[Operator] = frozenset({Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV})
LOGIC_OPS: FrozenSet[Operator] = frozenset({Operator.LESS, Operator.EQUAL, Operator.AND, Operator.OR, Operator.NOT})
JUMP_OPS: FrozenSet[Operator] = frozenset({Operator.JMT, Operator.JMF, Operator.JMP})


class OperandKind(Enum):
    REGISTER = "register"
    FLOAT = "float"
    INDEX = "index"
    NONE = "none"


@dataclass(frozen=True)
class Operand:
    kind: OperandKind
    register: Optional[Register] = None
    value: float = 0.0
    index: int = 0

    @staticmethod
    def reg(register: Register) -> "Operand":
        return Operand(OperandKind.REGISTER, register=register)

    @staticmethod
    def val(value: float) -> "Operand":
        return Operand(OperandKind.FLOAT, value=float(value))

    @staticmethod
    def idx(index: int) -> "Operand":
        return Operand(OperandKind.INDEX, index=int(index))

    @staticmethod
    def none() -> "Operand":
        return NONE

    def __str__(self) -> str:
        if self.kind is OperandKind.REGISTER:
            return self.register.name
        if self.kind is OperandKind.FLOAT:
            return f"#{self.value!r}"
        if self.kind is OperandKind.INDEX:
            return f"@{self.index}"
        return "_"


NONE = Operand(OperandKind.NONE)

OperandLike = Union[Operand, Register, None]


def to_operand(x: OperandLike) -> Operand:
    """Coerce builder arguments: registers become references, None becomes the empty operand."""
    if isinstance(x, Operand):
        return x
    if isinstance(x, Register):
        return Operand.reg(x)
    if x is None:
        return NONE
    raise InvalidOperandError(f"cannot use {x!r} as an operand")


@dataclass(frozen=True)
class Instruction:
    op: Operator
    src: Operand = NONE
    dst: Operand = NONE

    def __str__(self) -> str:
        if self.src.kind is OperandKind.NONE and self.dst.kind is OperandKind.NONE:
            return self.op.name
        if self.dst.kind is OperandKind.NONE:
            return f"{self.op.name} {self.src}"
        return f"{self.op.name} {self.src}, {self.dst}"
