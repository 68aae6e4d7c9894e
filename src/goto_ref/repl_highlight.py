"""prompt_toolkit lexer for live GoTo syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as GtLexer
from .token_types import KEYWORDS, TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "function": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

_PUNCTUATION = {TT.LPAR, TT.RPAR, TT.LSQB, TT.RSQB, TT.LBRACE, TT.RBRACE, TT.COMMA, TT.SEMI}

_TT_GROUP = {tt: "keyword" for tt in KEYWORDS.values()}
_TT_GROUP.update({
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.INT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.ILLEGAL: "error",
})
_TT_GROUP.update({tt: "punctuation" for tt in _PUNCTUATION})


def _group_for(tok: Tok, next_tok: Tok) -> str:
    group = _TT_GROUP.get(tok.type)
    if group is not None:
        if tok.type == TT.IDENT and next_tok.type == TT.LPAR:
            return "function"
        return group
    return "operator"


def _token_width(tok: Tok) -> int:
    # string token values drop their quotes
    if tok.type == TT.STRING:
        return len(tok.value) + 2
    return len(tok.value)


def _highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    tokens = list(GtLexer(text))
    result: StyleAndTextTuples = []
    pos = 0

    for tok, next_tok in zip(tokens, tokens[1:]):
        start = tok.column - 1
        end = start + _token_width(tok)

        # Unstyled gap before token.
        if start > pos:
            result.append(("", text[pos:start]))

        style = GROUP_STYLE.get(_group_for(tok, next_tok), "")
        result.append((style, text[start:end]))
        pos = end

    # Trailing unstyled text.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class GotoLexer(Lexer):
    """prompt_toolkit Lexer that highlights GoTo source using the language lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
