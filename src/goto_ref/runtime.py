from __future__ import annotations

import importlib
from typing import Dict, List, Optional

from .types import (
    BuiltinFn, Environment, GtBool, GtBuiltin, GtError, GtFn, GtInteger, GtList,
    GtNull, GtString, GtValue, LoopSignal, Outcome, ReturnSignal, is_abrupt,
)

__all__ = [
    "BuiltinFn", "Environment", "GtBool", "GtBuiltin", "GtError", "GtFn", "GtInteger",
    "GtList", "GtNull", "GtString", "GtValue", "LoopSignal", "Outcome", "ReturnSignal",
    "is_abrupt", "register_builtin", "init_stdlib", "install_builtins",
    "new_environment", "call_builtin",
]

# name => builtin; filled once by the stdlib module's decorators
_BUILTINS: Dict[str, GtBuiltin] = {}
_STDLIB_INITIALIZED = False

def register_builtin(name: str, *, arity: Optional[int] = None):
    def dec(fn: BuiltinFn):
        _BUILTINS[name] = GtBuiltin(name=name, fn=fn, arity=arity)
        return fn

    return dec

def init_stdlib() -> None:
    """Load the stdlib module (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("goto_ref.stdlib")
    _STDLIB_INITIALIZED = True

def install_builtins(env: Environment) -> Environment:
    """Bind every builtin into `env` unless the name is already taken there"""
    init_stdlib()

    for name, builtin in _BUILTINS.items():
        if not env.has_local(name):
            env.create(name, builtin)

    return env

def new_environment() -> Environment:
    """Fresh root scope with the builtins installed"""
    return install_builtins(Environment())

def call_builtin(builtin: GtBuiltin, args: List[GtValue]) -> GtValue:
    if builtin.arity is not None and len(args) != builtin.arity:
        return GtError(f"wrong number of arguments. got={len(args)}, want={builtin.arity}")

    return builtin.fn(args)
