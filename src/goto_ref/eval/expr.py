from __future__ import annotations

from typing import List

from ..runtime import Environment, GtBool, GtError, GtInteger, GtList, GtString, GtValue, Outcome, is_abrupt
from ..tree import IndexExpr, InfixExpr, ListLiteral, PrefixExpr
from .helpers import (
    EvalFunc,
    div_trunc,
    is_truthy,
    mod_trunc,
    pow_i64,
    type_mismatch,
    unknown_operator,
    wrap_i64,
)

def eval_prefix(node: PrefixExpr, env: Environment, eval_func: EvalFunc) -> Outcome:
    right = eval_func(node.right, env)
    if is_abrupt(right):
        return right

    match node.operator:
        case '!':
            return GtBool(not is_truthy(right))
        case '-':
            # always a fresh value; the operand is never touched
            if isinstance(right, GtInteger):
                return GtInteger(wrap_i64(-right.value))
            return GtError(f"Unknown Operator: -{right.type_name}")
        case op:
            return GtError(f"Unknown Operator: {op}{right.type_name}")

def eval_infix(node: InfixExpr, env: Environment, eval_func: EvalFunc) -> Outcome:
    # both operands are always evaluated, left first; && and || do not short-circuit
    left = eval_func(node.left, env)
    if is_abrupt(left):
        return left

    right = eval_func(node.right, env)
    if is_abrupt(right):
        return right

    return apply_binary_operator(node.operator, left, right)

def apply_binary_operator(op: str, left: GtValue, right: GtValue) -> GtValue:
    if op == '&&':
        return GtBool(is_truthy(left) and is_truthy(right))
    if op == '||':
        return GtBool(is_truthy(left) or is_truthy(right))

    if type(left) is not type(right):
        return type_mismatch(left, op, right)

    match left, right:
        case GtInteger(), GtInteger():
            return _integer_infix(op, left, right)
        case GtBool(value=lhs), GtBool(value=rhs):
            if op == '==':
                return GtBool(lhs == rhs)
            if op == '!=':
                return GtBool(lhs != rhs)
        case GtString(value=lhs), GtString(value=rhs):
            if op == '+':
                return GtString(lhs + rhs)
            if op == '==':
                return GtBool(lhs == rhs)
            if op == '!=':
                return GtBool(lhs != rhs)

    return unknown_operator(left, op, right)

def _integer_infix(op: str, left: GtInteger, right: GtInteger) -> GtValue:
    lhs, rhs = left.value, right.value

    match op:
        case '+':
            return GtInteger(wrap_i64(lhs + rhs))
        case '-':
            return GtInteger(wrap_i64(lhs - rhs))
        case '*':
            return GtInteger(wrap_i64(lhs * rhs))
        case '/' | '%':
            if rhs == 0:
                return GtError(f"Division by zero: INTEGER {op} INTEGER")
            if op == '/':
                return GtInteger(wrap_i64(div_trunc(lhs, rhs)))
            return GtInteger(mod_trunc(lhs, rhs))
        case '**':
            if lhs == 0 and rhs < 0:
                return GtError("Division by zero: INTEGER ** INTEGER")
            return GtInteger(pow_i64(lhs, rhs))
        case '<':
            return GtBool(lhs < rhs)
        case '>':
            return GtBool(lhs > rhs)
        case '<=':
            return GtBool(lhs <= rhs)
        case '>=':
            return GtBool(lhs >= rhs)
        case '==':
            return GtBool(lhs == rhs)
        case '!=':
            return GtBool(lhs != rhs)
        case _:
            return unknown_operator(left, op, right)

def eval_index(node: IndexExpr, env: Environment, eval_func: EvalFunc) -> Outcome:
    left = eval_func(node.left, env)
    if is_abrupt(left):
        return left

    index = eval_func(node.index, env)
    if is_abrupt(index):
        return index

    if not isinstance(left, (GtList, GtString)):
        return GtError(f"Index operator not supported: {left.type_name}")

    if not isinstance(index, GtInteger):
        return GtError(f"Index must be INTEGER, got {index.type_name}")

    pos = index.value

    match left:
        case GtList(items=items):
            if not 0 <= pos < len(items):
                return GtError(f"LIST index out of range: {pos}")
            return items[pos]
        case GtString(value=text):
            if not 0 <= pos < len(text):
                return GtError(f"STRING index out of range: {pos}")
            return GtString(text[pos])

    return GtError(f"Index operator not supported: {left.type_name}")

def eval_list_literal(node: ListLiteral, env: Environment, eval_func: EvalFunc) -> Outcome:
    items: List[GtValue] = []

    for element in node.elements.expressions:
        value = eval_func(element, env)
        if is_abrupt(value):
            return value
        items.append(value)

    return GtList(items)
