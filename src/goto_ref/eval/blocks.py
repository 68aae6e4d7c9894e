from __future__ import annotations

from typing import Sequence

from ..runtime import Environment, GtError, GtNull, LoopSignal, Outcome, ReturnSignal
from ..tree import BlockStatement, Node, Program
from .helpers import EvalFunc

def eval_statements(statements: Sequence[Node], env: Environment, eval_func: EvalFunc, unwrap_return: bool=False) -> Outcome:
    """Run statements in order, returning the last value.

    Errors and loop signals stop the sequence and are handed back as-is. A
    ReturnSignal is unwrapped only in a function body; any other block passes
    it up so the nearest enclosing call can unwrap it.
    """
    result: Outcome = GtNull()

    for stmt in statements:
        result = eval_func(stmt, env)

        match result:
            case ReturnSignal(value=value):
                return value if unwrap_return else result
            case GtError() | LoopSignal():
                return result

    return result

def eval_block(node: BlockStatement, env: Environment, eval_func: EvalFunc) -> Outcome:
    # blocks share the enclosing scope; only calls open a new one
    return eval_statements(node.statements, env, eval_func)

def eval_program(node: Program, env: Environment, eval_func: EvalFunc) -> Outcome:
    """Top-level sequence; control signals that reach here become errors."""
    result = eval_statements(node.statements, env, eval_func)

    match result:
        case ReturnSignal():
            return GtError("return used outside of a function")
        case LoopSignal(kind=kind):
            return GtError(f"{kind} used outside of a loop")

    return result
