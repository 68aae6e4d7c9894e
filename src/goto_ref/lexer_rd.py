"""
Lexer for GoTo

Turns GoTo source code into a stream of tokens.

Features:
- Single forward pass, no backtracking
- Lazy: tokens are produced one `next_token()` call at a time
- Position tracking (line, column)
- Never raises: unknown characters become ILLEGAL tokens
"""

from typing import Iterator, List

from .token_types import SHARED_PREFIX, SINGLE_CHAR, TT, Tok, lookup_ident

WHITESPACE = (' ', '\t', '\n', '\r')


def is_letter(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    GoTo lexer.

    Recognition order per token:
    1. end of input => EOF
    2. single-character tokens
    3. shared-prefix operators (`=` / `==`, `*` / `**`, ...), peeking one char
    4. string literals
    5. identifiers and keywords
    6. integer literals
    7. anything else => ILLEGAL
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def next_token(self) -> Tok:
        """Scan and return the next token; EOF repeats once input is exhausted"""
        self.skip_whitespace()

        line, column = self.line, self.column
        ch = self.peek()

        if self.pos >= len(self.source):
            return Tok(TT.EOF, '', line, column)

        if ch in SINGLE_CHAR:
            self.advance()
            return Tok(SINGLE_CHAR[ch], ch, line, column)

        if ch in SHARED_PREFIX:
            second, short_type, long_type = SHARED_PREFIX[ch]
            if self.peek(1) == second:
                return Tok(long_type, self.advance(2), line, column)
            return Tok(short_type, self.advance(), line, column)

        if ch == '"':
            return self.scan_string(line, column)

        if is_letter(ch):
            word = self.read_sequence(is_letter)
            return Tok(lookup_ident(word), word, line, column)

        if is_digit(ch):
            return Tok(TT.INT, self.read_sequence(is_digit), line, column)

        return Tok(TT.ILLEGAL, self.advance(), line, column)

    def __iter__(self) -> Iterator[Tok]:
        """Yield tokens up to and including EOF"""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TT.EOF:
                return

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self, line: int, column: int) -> Tok:
        """Scan "..." without escape processing; unterminated => ILLEGAL"""
        self.advance()  # opening quote
        content = ''

        while self.pos < len(self.source) and self.peek() != '"':
            content += self.advance()

        if self.pos >= len(self.source):
            return Tok(TT.ILLEGAL, '"' + content, line, column)

        self.advance()  # closing quote
        return Tok(TT.STRING, content, line, column)

    def read_sequence(self, predicate) -> str:
        start = self.pos
        while self.pos < len(self.source) and predicate(self.source[self.pos]):
            self.advance()
        return self.source[start:self.pos]

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        result = self.source[self.pos:self.pos + n]
        for ch in result:
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += len(result)
        return result

    def skip_whitespace(self) -> None:
        while self.peek() in WHITESPACE:
            self.advance()


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize a whole source, EOF included"""
    return list(Lexer(source))
