from __future__ import annotations

import pytest

from goto_ref import evaluate, parse
from goto_ref.runtime import LoopSignal, ReturnSignal
from tests.support.harness import (
    GotoSyntaxError,
    GtError,
    GtInteger,
    eval_source,
    new_environment,
    parse_clean,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param("var a = 5; -a; -a; a;", ("int", 5), None, id="negation-leaves-binding"),
    pytest.param("var a = 5; -a + -a;", ("int", -10), None, id="negate-binding-twice"),
    pytest.param("-5 + -5", ("int", -10), None, id="negate-literal-twice"),
    pytest.param("func f() { return -5; } f() + f();", ("int", -10), None, id="negated-literal-in-function-body"),
    pytest.param(
        "var total = 0; for var i = 0; i < 3; i = i + 1 { total = total + -1; } total;",
        ("int", -3),
        None,
        id="negated-literal-in-loop",
    ),
    pytest.param("var x = 1; x; 5 + true; x = 2;", ("error", "Type Mismatch: INTEGER + BOOLEAN"), None, id="error-stops-sequence"),
    pytest.param("var 1 = 2;", None, GotoSyntaxError, id="syntax-error-raises-in-runner"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_error_handling(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_reevaluating_same_tree_is_stable() -> None:
    program = parse_clean("-5;")

    first = evaluate(program, new_environment())
    second = evaluate(program, new_environment())

    assert first == second == GtInteger(-5)
    assert str(program) == "(-5)"


def test_error_stops_before_later_side_effects() -> None:
    env = new_environment()
    result = eval_source("var x = 1; 5 + true; x = 2;", env)

    assert isinstance(result, GtError)
    assert env.get("x") == GtInteger(1)


def test_error_rendering() -> None:
    result = eval_source("foobar;")

    assert isinstance(result, GtError)
    assert result.type_name == "ERROR"
    assert str(result) == "Error: Identifier not found: foobar"


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("return 1;", id="return"),
        pytest.param("break;", id="break"),
        pytest.param("continue;", id="continue"),
        pytest.param("if true { { return 2; } }", id="nested-return"),
    ],
)
def test_control_signals_never_escape(source: str) -> None:
    result = eval_source(source)

    assert not isinstance(result, (ReturnSignal, LoopSignal))
    assert isinstance(result, GtError)


def test_parse_never_raises_on_garbage() -> None:
    program, errors = parse("var = ; func ( { ] @ \"unterminated")

    assert errors
    assert all(isinstance(msg, str) for msg in errors)
    assert program is not None


def test_syntax_error_carries_every_diagnostic() -> None:
    from goto_ref import run

    with pytest.raises(GotoSyntaxError) as exc_info:
        run("var = 1; return 2")

    assert exc_info.value.diagnostics == [
        "expected token to be IDENT, got = instead",
        "expected token to be ;, got EOF instead",
    ]


def test_assignment_arity_mismatch_reaching_evaluator_is_an_error() -> None:
    program, errors = parse("var a, b = 1;")

    assert errors == ["Mismatch in number of values on both side of ="]
    result = evaluate(program, new_environment())
    assert result == GtError("Mismatch in number of values on both side of =")
