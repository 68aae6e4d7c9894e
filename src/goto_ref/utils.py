from __future__ import annotations

import os as _os
import sys
from typing import Iterable, List, TextIO

from .token_types import Tok
from .tree import Program

_FALSEY_FLAG_VALUES = {"", "0", "false", "no", "off"}

DEBUG_AST_VAR = "GOTO_DEBUG_AST"
DEBUG_TOKENS_VAR = "GOTO_DEBUG_TOKENS"


def env_flag(name: str) -> bool:
    """True when the environment variable is set to anything but an off value."""
    raw = _os.environ.get(name)
    if raw is None:
        return False
    return raw.strip().lower() not in _FALSEY_FLAG_VALUES


def format_tokens(tokens: Iterable[Tok]) -> str:
    lines: List[str] = []

    for tok in tokens:
        lines.append(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.value!r}")

    return "\n".join(lines)


def format_diagnostics(errors: Iterable[str]) -> str:
    return "\n".join(f"Error: {msg}" for msg in errors)


def dump_ast(program: Program, out: TextIO = sys.stderr) -> None:
    print(program.pretty(), file=out)


# Each GoTo call costs about a dozen Python frames.
RECURSION_LIMIT = 10_000


def raise_recursion_limit(limit: int = RECURSION_LIMIT) -> None:
    """Lift the interpreter's recursion limit; never lowers it."""
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)
