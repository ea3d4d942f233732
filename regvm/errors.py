from __future__ import annotations

from typing import Optional


class VMError(Exception):
    def __init__(self, message: str, pc: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        return f"{self.message} (pc={self.pc:04d})"


class InvalidPatchIndex(VMError, IndexError):
    pass


class InvalidOperandError(VMError, TypeError):
    pass


class StepLimitExceeded(VMError, RuntimeError):
    pass


class AsmSyntaxError(VMError, ValueError):
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"
