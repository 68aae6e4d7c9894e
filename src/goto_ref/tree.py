"""AST node classes produced by the parser and walked by the evaluator.

Nodes are frozen dataclasses: the parser builds each node once and nothing
rewrites it afterwards. `str(node)` reconstructs a source form that parses
back to an equivalent tree; `to_lark()` converts a tree into a `lark.Tree`
for structural debug dumps.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, is_dataclass
from typing import List, Optional, Union

from lark import Token, Tree
from typing_extensions import TypeAlias


class Node:
    """Marker base for every AST node."""
    __slots__ = ()

    def pretty(self, indent: str = '  ') -> str:
        return to_lark(self).pretty(indent)


# ---------- Expressions ----------

@dataclass(frozen=True)
class IntegerLiteral(Node):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class Identifier(Node):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PrefixExpr(Node):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpr(Node):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IndexExpr(Node):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass(frozen=True)
class ExpressionList(Node):
    expressions: List[Expression] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.expressions)

    def __str__(self) -> str:
        return ", ".join(str(e) for e in self.expressions)


@dataclass(frozen=True)
class IdentifierList(Node):
    identifiers: List[Identifier] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.identifiers)

    def names(self) -> List[str]:
        return [ident.value for ident in self.identifiers]

    def __str__(self) -> str:
        return ", ".join(str(i) for i in self.identifiers)


@dataclass(frozen=True)
class ListLiteral(Node):
    elements: ExpressionList

    def __str__(self) -> str:
        return f"[{self.elements}]"


@dataclass(frozen=True)
class CallExpression(Node):
    callee: Identifier
    arguments: ExpressionList

    def __str__(self) -> str:
        return f"{self.callee}({self.arguments})"


# ---------- Statements ----------

@dataclass(frozen=True)
class Assignment(Node):
    """`var a, b = 1, 2;` / `a, b = 1, 2;`

    `values` is None only for a bare declaration (`var a;`). Inside a
    for-header the assignment is an expression and has no trailing `;`.
    """
    is_declaration: bool
    names: IdentifierList
    values: Optional[ExpressionList] = None
    is_expression: bool = False

    def __str__(self) -> str:
        out = "var " if self.is_declaration else ""
        out += str(self.names)

        if self.values is not None:
            out += f" = {self.values}"

        if not self.is_expression:
            out += ";"
        return out


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class ReturnStatement(Node):
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True)
class LoopControlStatement(Node):
    kind: str  # 'break' | 'continue'

    def __str__(self) -> str:
        return f"{self.kind};"


@dataclass(frozen=True)
class BlockStatement(Node):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + join_statements(self.statements) + " }"


@dataclass(frozen=True)
class IfStatement(Node):
    """At most one of `alternative` / `follow_if` is set, and only after `else`."""
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None
    follow_if: Optional[IfStatement] = None

    def __str__(self) -> str:
        out = f"if {self.condition} {self.consequence}"

        if self.follow_if is not None:
            out += f" else {self.follow_if}"
        elif self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class ForStatement(Node):
    init: Assignment
    condition: Expression
    update: Assignment
    body: BlockStatement

    def __str__(self) -> str:
        return f"for {self.init}; {self.condition}; {self.update} {self.body}"


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: Identifier
    params: IdentifierList
    body: BlockStatement

    def __str__(self) -> str:
        return f"func {self.name}({self.params}) {self.body}"


@dataclass(frozen=True)
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return join_statements(self.statements)


Expression: TypeAlias = Union[
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    Identifier,
    PrefixExpr,
    InfixExpr,
    IndexExpr,
    ListLiteral,
    CallExpression,
]

Statement: TypeAlias = Union[
    Assignment,
    ExpressionStatement,
    ReturnStatement,
    LoopControlStatement,
    BlockStatement,
    IfStatement,
    ForStatement,
    FunctionDeclaration,
]


def join_statements(statements: List[Statement]) -> str:
    # expression statements need an explicit separator or `a; (b)` would
    # re-read as the call `a(b)`
    parts: List[str] = []
    last = len(statements) - 1

    for idx, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and idx < last:
            text += ";"
        parts.append(text)

    return " ".join(parts)


# ---------- Debug dumps ----------

_CAMEL_RE = re.compile(r'(?<!^)(?=[A-Z])')

def node_label(node: Node) -> str:
    return _CAMEL_RE.sub('_', type(node).__name__).lower()

def to_lark(node: Node) -> Tree:
    """Convert an AST into a lark Tree; scalar fields become named Tokens."""
    children: List[Union[Tree, Token]] = []

    for f in fields(node):
        children.extend(_lark_children(f.name, getattr(node, f.name)))

    return Tree(node_label(node), children)

def _lark_children(name: str, value: object) -> List[Union[Tree, Token]]:
    if value is None:
        return []

    if isinstance(value, list):
        out: List[Union[Tree, Token]] = []
        for item in value:
            out.extend(_lark_children(name, item))
        return out

    if isinstance(value, Node) and is_dataclass(value):
        return [to_lark(value)]

    if isinstance(value, bool):
        return [Token(name.upper(), "true" if value else "false")]

    return [Token(name.upper(), str(value))]
