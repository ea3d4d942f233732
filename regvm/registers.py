from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Dict

from .isa import Register


@dataclass
class Registers:
    r1: float = 0.0
    r2: float = 0.0
    r3: float = 0.0
    r4: float = 0.0
    r5: float = 0.0
    r6: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            setattr(self, f.name, float(getattr(self, f.name)))

    def read(self, reg: Register) -> float:
        return getattr(self, reg.name.lower())

    def write(self, reg: Register, value: float) -> None:
        setattr(self, reg.name.lower(), float(value))

    def copy(self) -> "Registers":
        return replace(self)

    def as_dict(self) -> Dict[str, float]:
        return {f.name.upper(): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_mapping(cls, values: Dict[Register, float]) -> "Registers":
        rs = cls()
        for reg, v in values.items():
            rs.write(reg, v)
        return rs
