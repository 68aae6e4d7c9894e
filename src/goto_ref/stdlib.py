"""Builtin functions (len, append, print) registered via goto_ref.runtime."""

from __future__ import annotations

from typing import List

from .runtime import register_builtin, GtError, GtInteger, GtList, GtNull, GtString, GtValue

@register_builtin("len", arity=1)
def std_len(args: List[GtValue]) -> GtValue:
    match args[0]:
        case GtString(value=text):
            return GtInteger(len(text))
        case GtList(items=items):
            return GtInteger(len(items))
        case other:
            return GtError(f"argument to `len` not supported, got {other.type_name}")

@register_builtin("append", arity=2)
def std_append(args: List[GtValue]) -> GtValue:
    target, value = args

    if not isinstance(target, GtList):
        return GtError(f"argument to `append` must be LIST, got {target.type_name}")

    target.items.append(value)
    return GtNull()

@register_builtin("print")
def std_print(args: List[GtValue]) -> GtNull:
    for arg in args:
        print(str(arg))
    return GtNull()
