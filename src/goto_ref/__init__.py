"""GoTo: a small dynamically typed scripting language with a tree-walking interpreter."""

from __future__ import annotations

from typing import List, Tuple

from .evaluator import evaluate
from .parser_rd import parse_source
from .runner import GotoSyntaxError, run
from .runtime import Environment, new_environment
from .tree import Program

__all__ = [
    "Environment",
    "GotoSyntaxError",
    "Program",
    "evaluate",
    "new_environment",
    "parse",
    "run",
]


def parse(text: str) -> Tuple[Program, List[str]]:
    """Parse source text into a Program plus its syntax diagnostics."""
    return parse_source(text)
