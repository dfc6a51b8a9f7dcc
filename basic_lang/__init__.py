from .grammar import BASIC_GRAMMAR
from .exceptions import BasicError, ParseError, ResolverError
from .interfaces import IOHandler, ConsoleIO
from .models import (
    RESERVED_WORDS,
    OPERATOR_TABLE,
    Position,
    Binder,
    UnitLiteral,
    NumberLiteral,
    StringLiteral,
    UnderLine,
    Function,
    Macro,
    Operator,
    NegativeExpr,
    BinaryExpr,
    PrimaryExpr,
    BlockStmt,
    ScopeStmt,
    NullStmt,
    IfStmt,
    WhileStmt,
    LetStmt,
    MacroStmt,
    NativeStmt,
    is_bindable,
    is_operand,
    is_expr,
    is_cluster,
    is_stmt,
)
from .precedence import make_binary_expr, resolve
from .builder import AstBuilder
from .parser import BasicParser, get_parser, parse_program
from .unparse import Unparser, dump, unparse, unparse_program

__version__ = "0.1.0"

__all__ = [
    "BASIC_GRAMMAR",
    "BasicError",
    "ParseError",
    "ResolverError",
    "IOHandler",
    "ConsoleIO",
    "RESERVED_WORDS",
    "OPERATOR_TABLE",
    "Position",
    "Binder",
    "UnitLiteral",
    "NumberLiteral",
    "StringLiteral",
    "UnderLine",
    "Function",
    "Macro",
    "Operator",
    "NegativeExpr",
    "BinaryExpr",
    "PrimaryExpr",
    "BlockStmt",
    "ScopeStmt",
    "NullStmt",
    "IfStmt",
    "WhileStmt",
    "LetStmt",
    "MacroStmt",
    "NativeStmt",
    "is_bindable",
    "is_operand",
    "is_expr",
    "is_cluster",
    "is_stmt",
    "make_binary_expr",
    "resolve",
    "AstBuilder",
    "BasicParser",
    "get_parser",
    "parse_program",
    "Unparser",
    "dump",
    "unparse",
    "unparse_program",
]
