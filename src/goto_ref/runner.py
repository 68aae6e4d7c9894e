from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from .evaluator import evaluate
from .lexer_rd import tokenize
from .parser_rd import parse_source
from .runtime import Environment, GtError, GtNull, GtValue
from .utils import (
    DEBUG_AST_VAR,
    DEBUG_TOKENS_VAR,
    dump_ast,
    env_flag,
    format_diagnostics,
    format_tokens,
    raise_recursion_limit,
)

USAGE = "usage: goto [--tokens] [--ast] [FILE | - | SOURCE]"


class GotoSyntaxError(Exception):
    """Source failed to parse; carries every diagnostic the parser recorded."""

    def __init__(self, diagnostics: List[str]):
        super().__init__("; ".join(diagnostics))
        self.diagnostics = diagnostics


def run(src: str, env: Optional[Environment]=None, show_tokens: bool=False, show_ast: bool=False) -> GtValue:
    """Parse and evaluate `src`. Raises GotoSyntaxError on diagnostics."""
    if show_tokens or env_flag(DEBUG_TOKENS_VAR):
        print(format_tokens(tokenize(src)), file=sys.stderr)

    program, errors = parse_source(src)

    if errors:
        raise GotoSyntaxError(errors)

    if show_ast or env_flag(DEBUG_AST_VAR):
        dump_ast(program)

    return evaluate(program, env)


def _load_source(arg: str) -> str:
    """
    Resolve CLI input into source text.
    - "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.is_file():
        return candidate.read_text(encoding="utf-8")

    return arg


def main(argv: Optional[List[str]]=None) -> int:
    show_tokens = False
    show_ast = False
    arg = None

    for token in sys.argv[1:] if argv is None else argv:
        if token == "--tokens":
            show_tokens = True
            continue

        if token == "--ast":
            show_ast = True
            continue

        if token in ("-h", "--help"):
            print(USAGE)
            return 0

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}\n{USAGE}")

    if arg is None:
        from .repl import repl
        repl()
        return 0

    source = _load_source(arg)
    raise_recursion_limit()

    try:
        result = run(source, show_tokens=show_tokens, show_ast=show_ast)
    except GotoSyntaxError as exc:
        print(format_diagnostics(exc.diagnostics), file=sys.stderr)
        return 1

    if isinstance(result, GtError):
        print(result, file=sys.stderr)
        return 1

    if not isinstance(result, GtNull):
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
