"""
Token Types for GoTo

Shared between lexer, parser and the REPL highlighter to avoid circular
dependencies. Enum values double as the display names used in parser
diagnostics.
"""

from typing import Dict, Tuple
from dataclasses import dataclass
from enum import Enum


class TT(Enum):
    """Token Types"""

    # Special
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    MOD = "%"
    POW = "**"
    NEG = "!"

    # Comparison
    EQ = "=="
    NEQ = "!="
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="

    # Logical
    AND = "&&"
    OR = "||"
    AMP = "&"
    PIPE = "|"

    # Punctuation
    COMMA = ","
    SEMI = ";"
    LPAR = "("
    RPAR = ")"
    LBRACE = "{"
    RBRACE = "}"
    LSQB = "["
    RSQB = "]"

    # Keywords
    VAR = "VAR"
    FUNC = "FUNC"
    RETURN = "RETURN"
    IF = "IF"
    ELSE = "ELSE"
    FOR = "FOR"
    BREAK = "BREAK"
    CONTINUE = "CONTINUE"
    TRUE = "TRUE"
    FALSE = "FALSE"


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"


KEYWORDS: Dict[str, TT] = {
    'var': TT.VAR,
    'func': TT.FUNC,
    'return': TT.RETURN,
    'if': TT.IF,
    'else': TT.ELSE,
    'for': TT.FOR,
    'break': TT.BREAK,
    'continue': TT.CONTINUE,
    'true': TT.TRUE,
    'false': TT.FALSE,
}

# Characters that always form a token on their own.
SINGLE_CHAR: Dict[str, TT] = {
    '+': TT.PLUS,
    '-': TT.MINUS,
    '/': TT.SLASH,
    '%': TT.MOD,
    ',': TT.COMMA,
    ';': TT.SEMI,
    '(': TT.LPAR,
    ')': TT.RPAR,
    '{': TT.LBRACE,
    '}': TT.RBRACE,
    '[': TT.LSQB,
    ']': TT.RSQB,
}

# first char => (expected second char, single-char type, two-char type)
SHARED_PREFIX: Dict[str, Tuple[str, TT, TT]] = {
    '=': ('=', TT.ASSIGN, TT.EQ),
    '!': ('=', TT.NEG, TT.NEQ),
    '<': ('=', TT.LT, TT.LTE),
    '>': ('=', TT.GT, TT.GTE),
    '*': ('*', TT.STAR, TT.POW),
    '&': ('&', TT.AMP, TT.AND),
    '|': ('|', TT.PIPE, TT.OR),
}


def lookup_ident(word: str) -> TT:
    return KEYWORDS.get(word, TT.IDENT)
