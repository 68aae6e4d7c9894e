from __future__ import annotations

from typing import List, Optional, Set

from ..runtime import Environment, GtError, GtInteger, GtNull, GtValue, Outcome, is_abrupt
from ..tree import Assignment
from .helpers import EvalFunc

__all__ = [
    "declare_ident",
    "update_ident",
    "eval_assignment",
]

def declare_ident(name: str, value: GtValue, env: Environment) -> GtValue:
    """Bind a new name in `env` itself; outer bindings are shadowed, not touched."""
    if not env.create(name, value):
        return GtError(f"Identifier already declared: {name}")
    return GtNull()

def update_ident(name: str, value: GtValue, env: Environment) -> GtValue:
    """Rebind the nearest existing binding anywhere up the chain."""
    if not env.update(name, value):
        return GtError(f"Identifier not found: {name}")
    return GtNull()

def eval_assignment(node: Assignment, env: Environment, eval_func: EvalFunc) -> Outcome:
    names = node.names.names()
    values: List[GtValue] = []

    if node.values is None:
        values = [GtInteger(0) for _ in names]
    else:
        # every right-hand side is evaluated before anything is bound
        for expr in node.values.expressions:
            value = eval_func(expr, env)
            if is_abrupt(value):
                return value
            values.append(value)

    if len(values) != len(names):
        return GtError("Mismatch in number of values on both side of =")

    # all names are checked before any is bound, so a failure binds nothing
    problem = _check_names(names, env, node.is_declaration)
    if problem is not None:
        return problem

    bind = declare_ident if node.is_declaration else update_ident

    for name, value in zip(names, values):
        bind(name, value, env)

    return GtNull()

def _check_names(names: List[str], env: Environment, is_declaration: bool) -> Optional[GtError]:
    seen: Set[str] = set()

    for name in names:
        if is_declaration:
            if name in seen or env.has_local(name):
                return GtError(f"Identifier already declared: {name}")
            seen.add(name)
        elif env.get(name) is None:
            return GtError(f"Identifier not found: {name}")

    return None
