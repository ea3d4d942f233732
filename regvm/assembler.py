from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import AsmSyntaxError, InvalidPatchIndex
from .isa import JUMP_OPS, Instruction, Operand, OperandKind, OperandLike, Operator, Register, to_operand

logger = logging.getLogger(__name__)

Program = Tuple[Instruction, ...]


class Assembler:
    """Builds a program one instruction at a time.

    Indices are stable: ``reserve_slot`` appends a NOP placeholder and
    ``patch`` overwrites it in place once a forward target is known.
    """

    def __init__(self) -> None:
        self._code: List[Instruction] = []

    def __len__(self) -> int:
        return len(self._code)

    def emit(self, op: Operator, src: OperandLike = None, dst: OperandLike = None) -> None:
        self._code.append(Instruction(op, to_operand(src), to_operand(dst)))

    def pos(self) -> int:
        return len(self._code)

    current_position = pos

    def reserve_slot(self) -> int:
        p = self.pos()
        self.emit(Operator.NOP)
        return p

    def patch(self, index: int, op: Operator, src: OperandLike = None, dst: OperandLike = None) -> None:
        if index < 0 or index >= len(self._code):
            raise InvalidPatchIndex(f"patch index {index} outside program of length {len(self._code)}")
        instr = Instruction(op, to_operand(src), to_operand(dst))
        logger.debug("patch %04d: %s -> %s", index, self._code[index], instr)
        self._code[index] = instr

    def finish(self) -> Program:
        return tuple(self._code)


def format_instruction(index: int, instr: Instruction) -> str:
    return f"{index:04d}  {instr}"


def disassemble(program: Sequence[Instruction]) -> List[str]:
    return [format_instruction(i, ins) for i, ins in enumerate(program)]


def _parse_operand(tok: str, labels: Dict[str, int], line_no: int) -> Operand:
    t = tok.strip()
    if t == "_":
        return Operand.none()
    if t.upper() in Register.__members__:
        return Operand.reg(Register[t.upper()])
    if t.startswith("@"):
        target = t[1:]
        if target.lstrip("-").isdigit():
            return Operand.idx(int(target))
        if target in labels:
            return Operand.idx(labels[target])
        raise AsmSyntaxError(f"unknown label: {target}", line_no)
    if t in labels:
        return Operand.idx(labels[t])
    lit = t[1:] if t.startswith("#") else t
    try:
        return Operand.val(float(lit))
    except ValueError:
        raise AsmSyntaxError(f"bad operand: {tok}", line_no) from None


AsmRow = Tuple[int, Optional[str], List[str]]


def parse_asm_text(text: str) -> List[AsmRow]:
    """Split assembly text into (line number, op name, operand tokens) rows.

    Label lines ``name:`` are kept as ``(line, None, [name])`` rows.
    """
    rows: List[AsmRow] = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.split(";", 1)[0].strip()
        if not line:
            continue
        if line.endswith(":"):
            name = line[:-1].strip()
            if not name or len(name.split()) != 1:
                raise AsmSyntaxError(f"invalid label: {raw}", line_no)
            rows.append((line_no, None, [name]))
            continue
        parts = [p for p in line.replace(",", " ").split() if p]
        if not parts or len(parts) > 3:
            raise AsmSyntaxError(f"invalid asm line: {raw}", line_no)
        rows.append((line_no, parts[0].upper(), parts[1:]))
    return rows


def assemble_text(text: str) -> Program:
    rows = parse_asm_text(text)

    labels: Dict[str, int] = {}
    pc = 0
    for line_no, op, args in rows:
        if op is None:
            if args[0] in labels:
                raise AsmSyntaxError(f"duplicate label: {args[0]}", line_no)
            labels[args[0]] = pc
        else:
            pc += 1

    asm = Assembler()
    for line_no, op, args in rows:
        if op is None:
            continue
        if op not in Operator.__members__:
            raise AsmSyntaxError(f"unknown operator: {op}", line_no)
        operator = Operator[op]
        operands = [_parse_operand(a, labels, line_no) for a in args]
        while len(operands) < 2:
            operands.append(Operand.none())
        if operator in JUMP_OPS and OperandKind.INDEX not in (operands[0].kind, operands[1].kind):
            raise AsmSyntaxError(f"{op} needs a jump target", line_no)
        asm.emit(operator, operands[0], operands[1])
    return asm.finish()
