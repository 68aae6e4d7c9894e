from __future__ import annotations

from ..runtime import Environment, GtError, GtNull, LoopSignal, Outcome, ReturnSignal, is_abrupt
from ..tree import ForStatement, IfStatement, LoopControlStatement
from .blocks import eval_statements
from .helpers import EvalFunc, is_truthy

def eval_if_stmt(node: IfStatement, env: Environment, eval_func: EvalFunc) -> Outcome:
    condition = eval_func(node.condition, env)
    if is_abrupt(condition):
        return condition

    if is_truthy(condition):
        return eval_func(node.consequence, env)

    if node.alternative is not None:
        return eval_func(node.alternative, env)

    if node.follow_if is not None:
        return eval_func(node.follow_if, env)

    return GtNull()

def eval_for_stmt(node: ForStatement, env: Environment, eval_func: EvalFunc) -> Outcome:
    """for init; condition; update { body }

    The init binding lives in the enclosing scope, so the loop variable stays
    readable after the loop. `break` skips the update, `continue` does not.
    """
    init = eval_func(node.init, env)
    if is_abrupt(init):
        return init

    while True:
        condition = eval_func(node.condition, env)
        if is_abrupt(condition):
            return condition

        if not is_truthy(condition):
            break

        outcome = eval_statements(node.body.statements, env, eval_func)

        match outcome:
            case LoopSignal(kind='break'):
                break
            case GtError() | ReturnSignal():
                return outcome

        update = eval_func(node.update, env)
        if is_abrupt(update):
            return update

    return GtNull()

def eval_loop_control(node: LoopControlStatement) -> LoopSignal:
    return LoopSignal(node.kind)
