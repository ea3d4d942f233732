from __future__ import annotations


def float_to_bool(v: float) -> bool:
    return v != 0.0


def bool_to_float(b: bool) -> float:
    return 1.0 if b else 0.0


def format_value(v: float) -> str:
    return repr(float(v))
