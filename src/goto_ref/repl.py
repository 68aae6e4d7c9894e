"""Interactive REPL for GoTo, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from typing import List, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from .evaluator import evaluate
from .parser_rd import parse_source
from .repl_highlight import GotoLexer
from .runtime import GtError, GtNull, new_environment
from .utils import DEBUG_AST_VAR, dump_ast, env_flag, format_diagnostics, raise_recursion_limit

PRIMARY_PROMPT = ">> "
CONTINUATION_PROMPT = "... "
EXIT_COMMAND = "exit"

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


class ReplSession:
    """
    Line accumulation and evaluation, independent of the terminal.

    Each fed line is appended to the pending input and the whole text is
    re-parsed. Clean input is evaluated against one persistent environment;
    input with diagnostics waits for more lines until an empty line gives up
    on it and reports the diagnostics.
    """

    def __init__(self, out: TextIO = sys.stdout, err: TextIO = sys.stderr):
        self.out = out
        self.err = err
        self.env = new_environment()
        self.pending: List[str] = []

    @property
    def prompt(self) -> str:
        return CONTINUATION_PROMPT if self.pending else PRIMARY_PROMPT

    def reset(self) -> None:
        """Drop pending input; bindings survive."""
        self.pending.clear()

    def feed(self, line: str) -> bool:
        """Process one input line. Returns False when the session should end."""
        line = _normalize(line)

        if line.strip() == EXIT_COMMAND:
            return False

        if not self.pending and not line.strip():
            return True

        if self.pending and not line.strip():
            _, errors = parse_source("\n".join(self.pending))
            print(format_diagnostics(errors), file=self.err)
            self.reset()
            return True

        self.pending.append(line)
        program, errors = parse_source("\n".join(self.pending))

        if errors:
            return True

        self.reset()

        if env_flag(DEBUG_AST_VAR):
            dump_ast(program, self.err)

        result = evaluate(program, self.env)

        if isinstance(result, GtError):
            print(result, file=self.err)
        elif not isinstance(result, GtNull):
            print(result, file=self.out)

        return True


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    raise_recursion_limit()
    state = ReplSession()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=GotoLexer(),
    )

    print(f"goto repl - Ctrl-D or `{EXIT_COMMAND}` to quit")

    while True:
        try:
            text = session.prompt(state.prompt)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            state.reset()
            continue

        if not state.feed(text):
            break
