"""
Recursive Descent Parser for GoTo

Statements are parsed by recursive descent; expressions by Pratt
(operator-precedence) climbing over per-token prefix/infix handlers.

Error policy: a failed expectation raises ParseError out of the construct
being parsed. The statement loop records the message as a diagnostic, drops
the statement and resumes at the next token, so one parse reports as many
problems as it can and callers must check the diagnostics list.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .lexer_rd import Lexer
from .token_types import TT, Tok
from .tree import (
    Assignment,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionList,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IdentifierList,
    IfStatement,
    IndexExpr,
    InfixExpr,
    IntegerLiteral,
    ListLiteral,
    LoopControlStatement,
    PrefixExpr,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)

INT64_MAX = 2**63 - 1
INT64_DIGITS = len(str(INT64_MAX))

NESTING_ERROR = "maximum nesting depth exceeded"

class Precedence(IntEnum):
    LOWEST = 1
    LOGICAL = 2      # && ||
    EQUALS = 3       # == !=
    LESSGREATER = 4  # < > <= >=
    SUM = 5          # + -
    PRODUCT = 6      # * / % **
    PREFIX = 7       # -x !x
    CALL = 8         # f(x)
    INDEX = 9        # a[i]

PRECEDENCES: Dict[TT, Precedence] = {
    TT.AND: Precedence.LOGICAL,
    TT.OR: Precedence.LOGICAL,
    TT.EQ: Precedence.EQUALS,
    TT.NEQ: Precedence.EQUALS,
    TT.LT: Precedence.LESSGREATER,
    TT.GT: Precedence.LESSGREATER,
    TT.LTE: Precedence.LESSGREATER,
    TT.GTE: Precedence.LESSGREATER,
    TT.PLUS: Precedence.SUM,
    TT.MINUS: Precedence.SUM,
    TT.STAR: Precedence.PRODUCT,
    TT.SLASH: Precedence.PRODUCT,
    TT.MOD: Precedence.PRODUCT,
    TT.POW: Precedence.PRODUCT,
    TT.LPAR: Precedence.CALL,
    TT.LSQB: Precedence.INDEX,
}

PrefixFn = Callable[[], Expression]
InfixFn = Callable[[Expression], Expression]

# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Aborts the construct being parsed; recorded as a diagnostic"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class Parser:
    """
    Parser over a two-token window (current, peek).

    Expression precedence (lowest to highest):
    1. logical (&&, ||)
    2. equality (==, !=)
    3. relational (<, >, <=, >=)
    4. additive (+, -)
    5. multiplicative (*, /, %, **)
    6. unary (-, !)
    7. call (f(...)), index (a[...])
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_fns: Dict[TT, PrefixFn] = {
            TT.IDENT: self.parse_identifier,
            TT.INT: self.parse_integer_literal,
            TT.STRING: self.parse_string_literal,
            TT.TRUE: self.parse_boolean,
            TT.FALSE: self.parse_boolean,
            TT.NEG: self.parse_prefix_expr,
            TT.MINUS: self.parse_prefix_expr,
            TT.LPAR: self.parse_grouped_expr,
            TT.LSQB: self.parse_list_literal,
        }

        self.infix_fns: Dict[TT, InfixFn] = {tt: self.parse_infix_expr for tt in PRECEDENCES}
        self.infix_fns[TT.LPAR] = self.parse_call_expr
        self.infix_fns[TT.LSQB] = self.parse_index_expr

        self.current = self.lexer.next_token()
        self.peek = self.lexer.next_token()

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def next_token(self, count: int = 1) -> None:
        """Shift peek into current and pull a new peek from the lexer"""
        for _ in range(count):
            self.current = self.peek
            self.peek = self.lexer.next_token()

    def current_is(self, token_type: TT) -> bool:
        return self.current.type == token_type

    def peek_is(self, token_type: TT) -> bool:
        return self.peek.type == token_type

    def token_error(self, expected: TT, got: Tok) -> ParseError:
        return ParseError(
            f"expected token to be {expected.value}, got {got.type.value} instead"
        )

    def expect_current(self, token_type: TT) -> Tok:
        """Require the current token to be of the given type"""
        if not self.current_is(token_type):
            raise self.token_error(token_type, self.current)
        return self.current

    def expect_peek(self, token_type: TT) -> Tok:
        """Require the peek token to be of the given type and advance onto it"""
        if not self.peek_is(token_type):
            raise self.token_error(token_type, self.peek)
        self.next_token()
        return self.current

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek.type, Precedence.LOWEST)

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Program:
        """Parse entire program"""
        statements: List[Statement] = []

        while not self.current_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        return Program(statements)

    def parse_statement(self) -> Optional[Statement]:
        """Parse one statement; a malformed one is recorded and dropped"""
        try:
            return self._parse_statement()
        except ParseError as exc:
            self.errors.append(exc.message)
            return None

    def _parse_statement(self) -> Optional[Statement]:
        match self.current.type:
            case TT.VAR:
                return self.parse_assignment(is_expression=False)
            case TT.RETURN:
                return self.parse_return_stmt()
            case TT.BREAK | TT.CONTINUE:
                return self.parse_loop_control_stmt()
            case TT.IF:
                return self.parse_if_stmt()
            case TT.LBRACE:
                return self.parse_block()
            case TT.FUNC:
                return self.parse_func_stmt()
            case TT.FOR:
                return self.parse_for_stmt()
            case TT.SEMI | TT.EOF:
                return None
            case TT.ILLEGAL:
                raise ParseError(f'ILLEGAL token "{self.current.value}" encountered')
            case TT.IDENT if self.peek_is(TT.COMMA) or self.peek_is(TT.ASSIGN):
                return self.parse_assignment(is_expression=False)
            case _:
                return self.parse_expression_stmt()

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_assignment(self, is_expression: bool, end: TT = TT.SEMI) -> Assignment:
        """
        var a, b = 1, 2;   (declaration)
        var a;             (declaration, zero-initialised; statement form only)
        a, b = 1, 2;       (update)

        In expression form (for-loop header) there is no trailing `;` and
        the current token is left on whatever follows the last value.
        """
        is_declaration = self.current_is(TT.VAR)
        if is_declaration:
            self.next_token()

        names = self.parse_identifier_list(allow_empty=False)

        if is_declaration and not is_expression and self.current_is(TT.SEMI):
            return Assignment(True, names, None, is_expression)

        self.expect_current(TT.ASSIGN)
        self.next_token()

        values = self.parse_expression_list(end)

        if len(values) != len(names):
            self.errors.append("Mismatch in number of values on both side of =")

        if not is_expression:
            self.expect_current(TT.SEMI)

        return Assignment(is_declaration, names, values, is_expression)

    def parse_return_stmt(self) -> ReturnStatement:
        """return expr;"""
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TT.SEMI)
        return ReturnStatement(value)

    def parse_loop_control_stmt(self) -> LoopControlStatement:
        """break; / continue;"""
        kind = self.current.value
        self.expect_peek(TT.SEMI)
        return LoopControlStatement(kind)

    def parse_block(self) -> BlockStatement:
        """{ stmt* } - leaves the current token on the closing brace"""
        statements: List[Statement] = []
        self.next_token()

        while not self.current_is(TT.RBRACE) and not self.current_is(TT.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        self.expect_current(TT.RBRACE)
        return BlockStatement(statements)

    def parse_if_stmt(self) -> IfStatement:
        """
        if cond { ... }
        if cond { ... } else { ... }
        if cond { ... } else if cond { ... } ...
        """
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TT.LBRACE)
        consequence = self.parse_block()

        if not self.peek_is(TT.ELSE):
            return IfStatement(condition, consequence)

        self.next_token()

        if self.peek_is(TT.IF):
            self.next_token()
            return IfStatement(condition, consequence, follow_if=self.parse_if_stmt())

        self.expect_peek(TT.LBRACE)
        return IfStatement(condition, consequence, alternative=self.parse_block())

    def parse_for_stmt(self) -> ForStatement:
        """for <assignment>; <condition>; <assignment> { body }"""
        self.next_token()

        init = self.parse_assignment(is_expression=True)

        self.expect_current(TT.SEMI)
        self.next_token()

        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TT.SEMI)
        self.next_token()

        update = self.parse_assignment(is_expression=True, end=TT.LBRACE)
        self.expect_current(TT.LBRACE)

        body = self.parse_block()
        return ForStatement(init, condition, update, body)

    def parse_func_stmt(self) -> FunctionDeclaration:
        """func name(a, b) { body }"""
        self.next_token()
        name = Identifier(self.expect_current(TT.IDENT).value)

        self.expect_peek(TT.LPAR)
        self.next_token()

        params = self.parse_identifier_list(allow_empty=True)
        self.expect_current(TT.RPAR)

        self.expect_peek(TT.LBRACE)
        body = self.parse_block()
        return FunctionDeclaration(name, params, body)

    def parse_expression_stmt(self) -> ExpressionStatement:
        expr = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(TT.SEMI):
            self.next_token()

        return ExpressionStatement(expr)

    # ========================================================================
    # Lists
    # ========================================================================

    def parse_identifier_list(self, allow_empty: bool) -> IdentifierList:
        """a, b, c - starts on the first name, ends on the token after the last"""
        identifiers: List[Identifier] = []

        if allow_empty and not self.current_is(TT.IDENT):
            self._check_eof()
            return IdentifierList(identifiers)

        while True:
            self._check_eof()
            identifiers.append(Identifier(self.expect_current(TT.IDENT).value))

            if self.peek_is(TT.COMMA):
                self.next_token(2)
                continue

            self.next_token()
            return IdentifierList(identifiers)

    def parse_expression_list(self, end: TT) -> ExpressionList:
        """e1, e2, ... - starts on the first expression, ends on the token after the last"""
        expressions: List[Expression] = []

        if self.current_is(end):
            return ExpressionList(expressions)

        while True:
            self._check_eof()
            expressions.append(self.parse_expression(Precedence.LOWEST))

            if self.peek_is(TT.COMMA):
                self.next_token(2)
                continue

            self.next_token()
            return ExpressionList(expressions)

    def _check_eof(self) -> None:
        if self.current_is(TT.EOF):
            raise ParseError("End Of File encountered while parsing")

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self, precedence: Precedence) -> Expression:
        """Pratt loop: prefix handler, then fold infix handlers while they bind tighter"""
        prefix = self.prefix_fns.get(self.current.type)
        if prefix is None:
            raise ParseError(
                f"no prefix parse function for {self.current.type.value} found"
            )

        left = prefix()

        while not self.peek_is(TT.SEMI) and precedence < self.peek_precedence():
            infix = self.infix_fns.get(self.peek.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.current.value)

    def parse_integer_literal(self) -> IntegerLiteral:
        literal = self.current.value
        # int() refuses very long digit strings, so check the length first
        digits = literal.lstrip("0") or "0"

        if len(digits) > INT64_DIGITS or int(digits) > INT64_MAX:
            raise ParseError(f'could not parse "{literal}" as integer')

        return IntegerLiteral(int(digits))

    def parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self.current.value)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.current_is(TT.TRUE))

    def parse_prefix_expr(self) -> PrefixExpr:
        operator = self.current.value
        self.next_token()
        return PrefixExpr(operator, self.parse_expression(Precedence.PREFIX))

    def parse_infix_expr(self, left: Expression) -> InfixExpr:
        operator = self.current.value
        precedence = self.current_precedence()
        self.next_token()
        return InfixExpr(left, operator, self.parse_expression(precedence))

    def parse_grouped_expr(self) -> Expression:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TT.RPAR)
        return expr

    def parse_list_literal(self) -> ListLiteral:
        self.next_token()
        elements = self.parse_expression_list(TT.RSQB)
        self.expect_current(TT.RSQB)
        return ListLiteral(elements)

    def parse_index_expr(self, left: Expression) -> IndexExpr:
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TT.RSQB)
        return IndexExpr(left, index)

    def parse_call_expr(self, left: Expression) -> CallExpression:
        if not isinstance(left, Identifier):
            raise ParseError(f"callee must be an identifier, got {left}")

        self.next_token()
        arguments = self.parse_expression_list(TT.RPAR)
        self.expect_current(TT.RPAR)
        return CallExpression(left, arguments)


# ============================================================================
# Entry points
# ============================================================================

def parse_source(source: str) -> Tuple[Program, List[str]]:
    """
    Parse GoTo source code to an AST.

    Returns the program together with the syntax diagnostics; statements that
    failed to parse are missing from the program.
    """
    parser = Parser(Lexer(source))

    try:
        program = parser.parse()
    except RecursionError:
        parser.errors.append(NESTING_ERROR)
        program = Program([])

    return program, parser.errors
