from __future__ import annotations

from typing import Callable

from ..runtime import Environment, GtBool, GtError, GtInteger, GtNull, GtString, GtValue, Outcome
from ..tree import Node

EvalFunc = Callable[[Node, Environment], Outcome]

I64_MIN = -(2**63)
I64_SPAN = 2**64

def is_truthy(val: GtValue) -> bool:
    match val:
        case GtBool(value=b):
            return b
        case GtNull():
            return False
        case GtInteger(value=num):
            return num != 0
        case GtString(value=s):
            return bool(s)
        case _:
            return True

def wrap_i64(value: int) -> int:
    """Two's-complement wrap into the signed 64-bit range"""
    return (value - I64_MIN) % I64_SPAN + I64_MIN

def div_trunc(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient

def mod_trunc(left: int, right: int) -> int:
    # sign follows the dividend
    remainder = abs(left) % abs(right)
    return -remainder if left < 0 else remainder

def pow_i64(base: int, exponent: int) -> int:
    """Integer power; callers reject base 0 with a negative exponent"""
    if exponent >= 0:
        return wrap_i64(pow(base, exponent, I64_SPAN))

    # truncated real result of base ** -n
    if base == 1:
        return 1
    if base == -1:
        return -1 if exponent % 2 else 1
    return 0

def type_mismatch(left: GtValue, op: str, right: GtValue) -> GtError:
    return GtError(f"Type Mismatch: {left.type_name} {op} {right.type_name}")

def unknown_operator(left: GtValue, op: str, right: GtValue) -> GtError:
    return GtError(f"Unknown Operator: {left.type_name} {op} {right.type_name}")
