from __future__ import annotations

import pytest

from tests.support.harness import run_runtime_case

SCENARIOS = [
    pytest.param("5", ("int", 5), None, id="int-literal"),
    pytest.param("-5", ("int", -5), None, id="negative-literal"),
    pytest.param("--5", ("int", 5), None, id="double-negation"),
    pytest.param("5 + 5 + 5 + 5 - 10", ("int", 10), None, id="sum-chain"),
    pytest.param("2 * 2 * 2 * 2 * 2", ("int", 32), None, id="product-chain"),
    pytest.param("-50 + 100 + -50", ("int", 0), None, id="negatives-in-sum"),
    pytest.param("5 * 2 + 10", ("int", 20), None, id="product-before-sum"),
    pytest.param("5 + 2 * 10", ("int", 25), None, id="sum-after-product"),
    pytest.param("20 + 2 * -10", ("int", 0), None, id="negative-factor"),
    pytest.param("50 / 2 * 2 + 10", ("int", 60), None, id="div-mul-left-assoc"),
    pytest.param("2 * (5 + 10)", ("int", 30), None, id="grouping"),
    pytest.param("3 * 3 * 3 + 10", ("int", 37), None, id="cube-plus"),
    pytest.param("(5 + 10 * 2 + 15 / 3) * 2 + -10", ("int", 50), None, id="mixed"),
    pytest.param("7 / 2", ("int", 3), None, id="div-truncates"),
    pytest.param("-7 / 2", ("int", -3), None, id="div-truncates-toward-zero"),
    pytest.param("7 % 3", ("int", 1), None, id="mod"),
    pytest.param("-7 % 3", ("int", -1), None, id="mod-sign-of-dividend"),
    pytest.param("7 % -3", ("int", 1), None, id="mod-negative-divisor"),
    pytest.param("2 ** 10", ("int", 1024), None, id="pow"),
    pytest.param("2 ** 3 ** 2", ("int", 64), None, id="pow-left-assoc"),
    pytest.param("2 * 3 ** 2", ("int", 36), None, id="pow-same-level-as-mul"),
    pytest.param("5 ** 0", ("int", 1), None, id="pow-zero"),
    pytest.param("2 ** -1", ("int", 0), None, id="pow-negative-truncates"),
    pytest.param("-1 ** -3", ("int", -1), None, id="pow-negative-one-odd"),
    pytest.param("1 ** -3", ("int", 1), None, id="pow-one-negative"),
    pytest.param("9223372036854775807 + 1", ("int", -(2**63)), None, id="add-wraps"),
    pytest.param("-9223372036854775807 - 2", ("int", 2**63 - 1), None, id="sub-wraps"),
    pytest.param("2 ** 64", ("int", 0), None, id="pow-wraps"),
    pytest.param("1 < 2", ("bool", True), None, id="lt"),
    pytest.param("1 > 2", ("bool", False), None, id="gt"),
    pytest.param("1 <= 1", ("bool", True), None, id="lte"),
    pytest.param("2 >= 3", ("bool", False), None, id="gte"),
    pytest.param("1 == 1", ("bool", True), None, id="eq"),
    pytest.param("1 != 1", ("bool", False), None, id="neq"),
    pytest.param("true == true", ("bool", True), None, id="bool-eq"),
    pytest.param("true != false", ("bool", True), None, id="bool-neq"),
    pytest.param("(1 < 2) == true", ("bool", True), None, id="comparison-eq-bool"),
    pytest.param("(1 > 2) == true", ("bool", False), None, id="comparison-neq-bool"),
    pytest.param('"foo" + "bar"', ("string", "foobar"), None, id="concat"),
    pytest.param('"a" == "a"', ("bool", True), None, id="string-eq"),
    pytest.param('"a" != "a"', ("bool", False), None, id="string-neq"),
    pytest.param("!true", ("bool", False), None, id="bang-true"),
    pytest.param("!false", ("bool", True), None, id="bang-false"),
    pytest.param("!5", ("bool", False), None, id="bang-int"),
    pytest.param("!0", ("bool", True), None, id="bang-zero"),
    pytest.param('!""', ("bool", True), None, id="bang-empty-string"),
    pytest.param("!!5", ("bool", True), None, id="double-bang"),
    pytest.param("![]", ("bool", False), None, id="bang-empty-list-is-truthy"),
    pytest.param("true && 1", ("bool", True), None, id="and-mixed-types"),
    pytest.param('0 || ""', ("bool", False), None, id="or-falsy"),
    pytest.param("false || 3", ("bool", True), None, id="or-truthy-right"),
    pytest.param("1 < 2 && 2 < 3", ("bool", True), None, id="and-of-comparisons"),
    pytest.param(
        "var n = 0; func bump() { n = n + 1; return true; } false && bump(); true || bump(); n;",
        ("int", 2),
        None,
        id="logical-operators-evaluate-both-sides",
    ),
    pytest.param(
        "var order = []; func log(v) { append(order, v); return v; } log(1) > log(2); order;",
        ("list", "[1, 2]"),
        None,
        id="operands-left-to-right",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_operators(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


ERROR_SCENARIOS = [
    pytest.param(
        "false && undefinedName",
        ("error", "Identifier not found: undefinedName"),
        None,
        id="and-right-side-always-evaluated",
    ),
    pytest.param(
        "true || undefinedName",
        ("error", "Identifier not found: undefinedName"),
        None,
        id="or-right-side-always-evaluated",
    ),
    pytest.param("5 + true;", ("error", "Type Mismatch: INTEGER + BOOLEAN"), None, id="type-mismatch"),
    pytest.param("5 + true; 5;", ("error", "Type Mismatch: INTEGER + BOOLEAN"), None, id="mismatch-stops-program"),
    pytest.param('1 == "1"', ("error", "Type Mismatch: INTEGER == STRING"), None, id="mismatch-equality"),
    pytest.param("-true", ("error", "Unknown Operator: -BOOLEAN"), None, id="negate-bool"),
    pytest.param('-"a"', ("error", "Unknown Operator: -STRING"), None, id="negate-string"),
    pytest.param("true + false;", ("error", "Unknown Operator: BOOLEAN + BOOLEAN"), None, id="bool-plus"),
    pytest.param("true < false;", ("error", "Unknown Operator: BOOLEAN < BOOLEAN"), None, id="bool-lt"),
    pytest.param('"Hello" - "World"', ("error", "Unknown Operator: STRING - STRING"), None, id="string-minus"),
    pytest.param("[1] + [2]", ("error", "Unknown Operator: LIST + LIST"), None, id="list-plus"),
    pytest.param("[1] == [1]", ("error", "Unknown Operator: LIST == LIST"), None, id="list-eq"),
    pytest.param("5 / 0", ("error", "Division by zero: INTEGER / INTEGER"), None, id="div-zero"),
    pytest.param("5 % 0", ("error", "Division by zero: INTEGER % INTEGER"), None, id="mod-zero"),
    pytest.param("0 ** -1", ("error", "Division by zero: INTEGER ** INTEGER"), None, id="pow-zero-negative"),
    pytest.param(
        "if 10 > 1 { true + false; }",
        ("error", "Unknown Operator: BOOLEAN + BOOLEAN"),
        None,
        id="error-inside-if",
    ),
    pytest.param(
        "(1 + true) + foo",
        ("error", "Type Mismatch: INTEGER + BOOLEAN"),
        None,
        id="left-operand-error-first",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", ERROR_SCENARIOS)
def test_operator_errors(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
