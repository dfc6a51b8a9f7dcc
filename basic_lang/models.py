from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple, Union


class Position(NamedTuple):
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


RESERVED_WORDS = frozenset({"fun", "if", "while", "let", "else", "_", "macro"})

DUMMY = "dummy"

# op_str -> (priority, left_assoc); higher priority binds tighter.
OPERATOR_TABLE: Dict[str, Tuple[int, bool]] = {
    DUMMY: (-(2**31) // 100, True),
    "<-": (8, False),
    "==": (9, True),
    "!=": (9, True),
    ">": (9, True),
    "<": (9, True),
    "+": (10, True),
    "-": (10, True),
    "*": (11, True),
    "/": (11, True),
    "%": (11, True),
}


def _pos():
    return field(default=None, compare=False, repr=False)


# --- Operands ---


@dataclass(frozen=True)
class Binder:
    text: str
    pos: Optional[Position] = _pos()


@dataclass(frozen=True)
class UnitLiteral:
    pos: Optional[Position] = _pos()


@dataclass(frozen=True)
class NumberLiteral:
    value: int
    pos: Optional[Position] = _pos()


@dataclass(frozen=True)
class StringLiteral:
    literal: str
    pos: Optional[Position] = _pos()


@dataclass(frozen=True)
class UnderLine:
    """Placeholder for an argument left unbound in a partial application."""

    pos: Optional[Position] = _pos()


@dataclass
class Function:
    """Function literal.

    Each parameter is a ``(Binder, value)`` pair; a non-None value means the
    parameter was already bound by an earlier partial application.
    ``outer_env`` is the only mutable field and is set by the evaluator when
    the literal is closed over an environment. The parser always leaves it
    unset.
    """

    params: Tuple[Tuple[Binder, Optional[Any]], ...]
    body: "Cluster"
    outer_env: Optional[Any] = field(default=None, compare=False, repr=False)
    pos: Optional[Position] = _pos()

    @property
    def rest_num_of_params(self) -> int:
        return sum(1 for _, value in self.params if value is None)


@dataclass(frozen=True)
class Macro:
    params: Tuple[Binder, ...]
    body: "Cluster"
    pos: Optional[Position] = _pos()


@dataclass(frozen=True)
class Operator:
    op_str: str
    pos: Optional[Position] = _pos()

    def __post_init__(self):
        if self.op_str not in OPERATOR_TABLE:
            raise ValueError(f"Unknown operator '{self.op_str}'")

    @property
    def priority(self) -> int:
        return OPERATOR_TABLE[self.op_str][0]

    @property
    def left_assoc(self) -> bool:
        return OPERATOR_TABLE[self.op_str][1]


# --- Compound expressions ---


@dataclass(frozen=True)
class NegativeExpr:
    primary: "Expr"


@dataclass(frozen=True)
class BinaryExpr:
    left: "Expr"
    op: Operator
    right: "Expr"


@dataclass(frozen=True)
class PrimaryExpr:
    """Application of ``child`` to a chain of postfix arguments."""

    child: "Expr"
    arguments: Tuple["Cluster", ...]

    @property
    def num_of_valid_args(self) -> int:
        return sum(1 for arg in self.arguments if not isinstance(arg, UnderLine))


# --- Statements ---


@dataclass(frozen=True)
class BlockStmt:
    stmts: Tuple["Stmt", ...]


@dataclass(frozen=True)
class ScopeStmt:
    stmts: Tuple["Stmt", ...]


@dataclass(frozen=True)
class NullStmt:
    pass


@dataclass(frozen=True)
class IfStmt:
    condition: "Expr"
    then_block: "Cluster"
    else_block: Optional["Cluster"] = None


@dataclass(frozen=True)
class WhileStmt:
    condition: "Expr"
    body: "Cluster"


@dataclass(frozen=True)
class LetStmt:
    named: Binder
    params: Optional[Tuple[Binder, ...]]
    codes: "Cluster"


@dataclass(frozen=True)
class MacroStmt:
    named: Binder
    params: Optional[Tuple[Binder, ...]]
    codes: "Cluster"


@dataclass(frozen=True)
class NativeStmt:
    """Hook for an operation the evaluator implements natively."""

    tag: str
    params: Tuple[Binder, ...]


# --- Capability layers ---

Bindable = Union[UnitLiteral, NumberLiteral, StringLiteral, Function, Macro]
Operand = Union[Bindable, Binder, UnderLine]
Expr = Union[Operand, NegativeExpr, BinaryExpr, PrimaryExpr]
Cluster = Union[Expr, BlockStmt, ScopeStmt]
Stmt = Union[Cluster, NullStmt, IfStmt, WhileStmt, LetStmt, MacroStmt, NativeStmt]
Evaluable = Stmt

BINDABLE_TYPES = (UnitLiteral, NumberLiteral, StringLiteral, Function, Macro)
OPERAND_TYPES = BINDABLE_TYPES + (Binder, UnderLine)
EXPR_TYPES = OPERAND_TYPES + (NegativeExpr, BinaryExpr, PrimaryExpr)
CLUSTER_TYPES = EXPR_TYPES + (BlockStmt, ScopeStmt)
STMT_TYPES = CLUSTER_TYPES + (
    NullStmt,
    IfStmt,
    WhileStmt,
    LetStmt,
    MacroStmt,
    NativeStmt,
)


def is_bindable(node: Any) -> bool:
    return isinstance(node, BINDABLE_TYPES)


def is_operand(node: Any) -> bool:
    return isinstance(node, OPERAND_TYPES)


def is_expr(node: Any) -> bool:
    return isinstance(node, EXPR_TYPES)


def is_cluster(node: Any) -> bool:
    return isinstance(node, CLUSTER_TYPES)


def is_stmt(node: Any) -> bool:
    return isinstance(node, STMT_TYPES)
