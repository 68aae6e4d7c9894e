from __future__ import annotations

import io

import pytest

from goto_ref.repl import CONTINUATION_PROMPT, PRIMARY_PROMPT, ReplSession
from goto_ref.repl_highlight import GROUP_STYLE, _highlight_line
from tests.support.harness import GtInteger


@pytest.fixture
def session() -> ReplSession:
    return ReplSession(out=io.StringIO(), err=io.StringIO())


def test_evaluates_complete_line(session: ReplSession) -> None:
    assert session.feed("1 + 2;")
    assert session.out.getvalue() == "3\n"
    assert session.err.getvalue() == ""
    assert session.prompt == PRIMARY_PROMPT


def test_bindings_persist_across_lines(session: ReplSession) -> None:
    session.feed("var a = 10;")
    session.feed("a = a * 2;")
    session.feed("a;")

    assert session.out.getvalue() == "20\n"
    assert session.env.get("a") == GtInteger(20)


def test_null_results_are_not_echoed(session: ReplSession) -> None:
    session.feed("var a = 1;")
    session.feed("func f() { }")

    assert session.out.getvalue() == ""


def test_incomplete_input_waits_for_more_lines(session: ReplSession) -> None:
    assert session.feed("func add(x, y) {")
    assert session.prompt == CONTINUATION_PROMPT
    assert session.out.getvalue() == ""

    session.feed("  return x + y;")
    session.feed("}")
    assert session.prompt == PRIMARY_PROMPT

    session.feed("add(2, 3);")
    assert session.out.getvalue() == "5\n"


def test_blank_line_abandons_pending_input(session: ReplSession) -> None:
    session.feed("var x = ")
    assert session.prompt == CONTINUATION_PROMPT

    assert session.feed("")
    assert session.prompt == PRIMARY_PROMPT
    assert session.err.getvalue().startswith("Error: ")
    assert session.env.get("x") is None


def test_runtime_error_goes_to_err(session: ReplSession) -> None:
    session.feed("missing;")

    assert session.out.getvalue() == ""
    assert session.err.getvalue() == "Error: Identifier not found: missing\n"


def test_error_does_not_reset_environment(session: ReplSession) -> None:
    session.feed("var kept = 3;")
    session.feed("kept + true;")
    session.feed("kept;")

    assert session.out.getvalue() == "3\n"
    assert "Type Mismatch: INTEGER + BOOLEAN" in session.err.getvalue()


def test_exit_ends_session(session: ReplSession) -> None:
    assert session.feed("exit") is False


def test_exit_ends_session_during_continuation(session: ReplSession) -> None:
    session.feed("if true {")
    assert session.prompt == CONTINUATION_PROMPT
    assert session.feed("exit") is False
    assert session.out.getvalue() == ""


def test_blank_line_at_primary_prompt_is_ignored(session: ReplSession) -> None:
    assert session.feed("   ")
    assert session.out.getvalue() == ""
    assert session.err.getvalue() == ""


def test_invisible_characters_are_stripped(session: ReplSession) -> None:
    session.feed("\u200b1 +\u00a0 2;\r")
    assert session.out.getvalue() == "3\n"


def test_reset_keeps_bindings(session: ReplSession) -> None:
    session.feed("var a = 1;")
    session.feed("if a == 1 {")
    session.reset()

    assert session.prompt == PRIMARY_PROMPT
    assert session.env.get("a") == GtInteger(1)


def test_highlight_styles_tokens() -> None:
    fragments = _highlight_line('var s = len("hi");')

    assert "".join(text for _, text in fragments) == 'var s = len("hi");'
    assert (GROUP_STYLE["keyword"], "var") in fragments
    assert (GROUP_STYLE["function"], "len") in fragments
    assert (GROUP_STYLE["string"], '"hi"') in fragments


def test_highlight_marks_illegal_tokens() -> None:
    fragments = _highlight_line("1 @ 2")

    assert (GROUP_STYLE["number"], "1") in fragments
    assert (GROUP_STYLE["error"], "@") in fragments


def test_highlight_empty_line() -> None:
    assert _highlight_line("") == [("", "")]


def test_stack_overflow_is_reported_and_session_survives(session: ReplSession) -> None:
    session.feed("func down(n) { return down(n + 1); }")
    session.feed("down(0);")
    session.feed("1 + 1;")

    assert session.err.getvalue() == "Error: maximum call depth exceeded\n"
    assert session.out.getvalue() == "2\n"
