from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

from .tree import BlockStatement

# ---------- Value Model ----------
# `type_name` is the upper-case name used in runtime error messages;
# `__str__` is the human-readable rendering printed by the REPL and `print`.

@dataclass
class GtNull:
    type_name: ClassVar[str] = "NULL"

    def __str__(self) -> str:
        return "null"

@dataclass
class GtInteger:
    value: int
    type_name: ClassVar[str] = "INTEGER"

    def __str__(self) -> str:
        return str(self.value)

@dataclass
class GtBool:
    value: bool
    type_name: ClassVar[str] = "BOOLEAN"

    def __str__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class GtString:
    value: str
    type_name: ClassVar[str] = "STRING"

    def __str__(self) -> str:
        return self.value

@dataclass(eq=False)
class GtList:
    """Shared by reference: every binding holding the list sees `append`."""
    items: List['GtValue'] = field(default_factory=list)
    type_name: ClassVar[str] = "LIST"

    def __str__(self) -> str:
        return "[" + ", ".join(str(x) for x in self.items) + "]"

@dataclass(eq=False)
class GtFn:
    name: str
    params: List[str]
    body: BlockStatement
    env: 'Environment' = field(repr=False)  # closure scope, kept alive by the function
    type_name: ClassVar[str] = "FUNCTION"

    def __str__(self) -> str:
        return f"func {self.name}({', '.join(self.params)}) {self.body}"

BuiltinFn = Callable[[List['GtValue']], 'GtValue']

@dataclass(frozen=True)
class GtBuiltin:
    name: str
    fn: BuiltinFn
    arity: Optional[int] = None  # None for variadic
    type_name: ClassVar[str] = "BUILTIN"

    def __str__(self) -> str:
        return f"builtin {self.name}"

@dataclass(frozen=True)
class GtError:
    message: str
    type_name: ClassVar[str] = "ERROR"

    def __str__(self) -> str:
        return f"Error: {self.message}"

# ---------- Control carriers ----------
# Never visible to programs; the evaluator returns them up the statement
# sequence until a function body or loop consumes them.

@dataclass(frozen=True)
class ReturnSignal:
    value: 'GtValue'

@dataclass(frozen=True)
class LoopSignal:
    kind: str  # 'break' | 'continue'

GtValue: TypeAlias = (
    GtNull
    | GtInteger
    | GtBool
    | GtString
    | GtList
    | GtFn
    | GtBuiltin
    | GtError
)

# What a single evaluation step produces.
Outcome: TypeAlias = GtValue | ReturnSignal | LoopSignal

_ABRUPT_TYPES: Tuple[type, ...] = (GtError, ReturnSignal, LoopSignal)

def is_abrupt(result: Outcome) -> TypeGuard[GtError | ReturnSignal | LoopSignal]:
    """True for results that stop a statement sequence"""
    return isinstance(result, _ABRUPT_TYPES)

# ---------- Scopes ----------

class Environment:
    """
    One lexical scope, chained to the scope it was created in.

    The only children are call scopes. Their parent is the callee's captured
    environment, which the GtFn keeps reachable.
    """

    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.vars: Dict[str, GtValue] = {}

    def extend(self) -> 'Environment':
        return Environment(self)

    def has_local(self, name: str) -> bool:
        return name in self.vars

    def create(self, name: str, val: GtValue) -> bool:
        """Bind a new name in this scope; False if it is already bound here"""
        if name in self.vars:
            return False

        self.vars[name] = val
        return True

    def get(self, name: str) -> Optional[GtValue]:
        env: Optional[Environment] = self

        while env is not None:
            if name in env.vars:
                return env.vars[name]
            env = env.parent

        return None

    def update(self, name: str, val: GtValue) -> bool:
        """Rebind the nearest existing binding; False if the name is unbound"""
        env: Optional[Environment] = self

        while env is not None:
            if name in env.vars:
                env.vars[name] = val
                return True
            env = env.parent

        return False
