from __future__ import annotations

from typing import List

from ..runtime import (
    Environment,
    GtBuiltin,
    GtError,
    GtFn,
    GtValue,
    LoopSignal,
    Outcome,
    call_builtin,
    is_abrupt,
)
from ..tree import CallExpression, FunctionDeclaration
from .bind import declare_ident
from .blocks import eval_statements
from .helpers import EvalFunc

def eval_fn_decl(node: FunctionDeclaration, env: Environment) -> GtValue:
    # the defining scope is captured, not copied: later bindings there stay visible
    fn_value = GtFn(name=node.name.value, params=node.params.names(), body=node.body, env=env)
    return declare_ident(fn_value.name, fn_value, env)

def eval_call(node: CallExpression, env: Environment, eval_func: EvalFunc) -> Outcome:
    args: List[GtValue] = []

    for expr in node.arguments.expressions:
        value = eval_func(expr, env)
        if is_abrupt(value):
            return value
        args.append(value)

    name = node.callee.value
    callee = env.get(name)

    if callee is None:
        return GtError(f"Function not found: {name}")

    return call_value(callee, args, eval_func)

def call_value(callee: GtValue, args: List[GtValue], eval_func: EvalFunc) -> Outcome:
    match callee:
        case GtFn():
            return call_function(callee, args, eval_func)
        case GtBuiltin():
            return call_builtin(callee, args)
        case _:
            return GtError(f"Not a function: {callee.type_name}")

def call_function(fn: GtFn, args: List[GtValue], eval_func: EvalFunc) -> Outcome:
    if len(args) != len(fn.params):
        return GtError(f"Wrong number of arguments to {fn.name}: got={len(args)}, want={len(fn.params)}")

    call_env = fn.env.extend()

    for param, arg in zip(fn.params, args):
        bound = declare_ident(param, arg, call_env)
        if isinstance(bound, GtError):
            return bound

    result = eval_statements(fn.body.statements, call_env, eval_func, unwrap_return=True)

    match result:
        case LoopSignal(kind=kind):
            return GtError(f"{kind} used outside of a loop")

    return result
