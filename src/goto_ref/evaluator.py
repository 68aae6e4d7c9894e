from __future__ import annotations

from typing import Callable, Dict, Optional

from .runtime import (
    Environment,
    GtBool,
    GtError,
    GtInteger,
    GtString,
    GtValue,
    Outcome,
    ReturnSignal,
    install_builtins,
    is_abrupt,
    new_environment,
)
from .tree import (
    Assignment,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    IndexExpr,
    InfixExpr,
    IntegerLiteral,
    ListLiteral,
    LoopControlStatement,
    Node,
    PrefixExpr,
    Program,
    ReturnStatement,
    StringLiteral,
)

from .eval.bind import eval_assignment
from .eval.blocks import eval_block, eval_program
from .eval.expr import eval_index, eval_infix, eval_list_literal, eval_prefix
from .eval.fn import eval_call, eval_fn_decl
from .eval.loops import eval_for_stmt, eval_if_stmt, eval_loop_control

STACK_OVERFLOW = "maximum call depth exceeded"

# ---------------- Public API ----------------

def evaluate(program: Program, env: Optional[Environment]=None) -> GtValue:
    """Run a program against `env` (a fresh root scope when omitted).

    Builtins are installed into `env` first. Runtime failures, running out of
    stack included, come back as a GtError value; control signals never escape.
    """
    if env is None:
        env = new_environment()
    else:
        install_builtins(env)

    try:
        return eval_program(program, env, eval_node)
    except RecursionError:
        return GtError(STACK_OVERFLOW)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> Outcome:
    handler = _NODE_DISPATCH.get(type(n))
    if handler is not None:
        return handler(n, env)

    match n:
        case IntegerLiteral(value=value):
            return GtInteger(value)
        case BooleanLiteral(value=value):
            return GtBool(value)
        case StringLiteral(value=value):
            return GtString(value)
        case Identifier(value=name):
            return _eval_identifier(name, env)
        case ExpressionStatement(expression=expr):
            return eval_node(expr, env)
        case ReturnStatement(value=expr):
            value = eval_node(expr, env)
            if is_abrupt(value):
                return value
            return ReturnSignal(value)
        case LoopControlStatement():
            return eval_loop_control(n)
        case FunctionDeclaration():
            return eval_fn_decl(n, env)
        case Program():
            return eval_program(n, env, eval_node)
        case _:
            return GtError(f"Unknown node: {type(n).__name__}")

def _eval_identifier(name: str, env: Environment) -> GtValue:
    value = env.get(name)
    if value is None:
        return GtError(f"Identifier not found: {name}")
    return value

# ---------------- Dispatch ----------------

_NODE_DISPATCH: Dict[type, Callable[[Node, Environment], Outcome]] = {
    PrefixExpr: lambda n, env: eval_prefix(n, env, eval_node),
    InfixExpr: lambda n, env: eval_infix(n, env, eval_node),
    IndexExpr: lambda n, env: eval_index(n, env, eval_node),
    ListLiteral: lambda n, env: eval_list_literal(n, env, eval_node),
    CallExpression: lambda n, env: eval_call(n, env, eval_node),
    Assignment: lambda n, env: eval_assignment(n, env, eval_node),
    BlockStatement: lambda n, env: eval_block(n, env, eval_node),
    IfStatement: lambda n, env: eval_if_stmt(n, env, eval_node),
    ForStatement: lambda n, env: eval_for_stmt(n, env, eval_node),
}
