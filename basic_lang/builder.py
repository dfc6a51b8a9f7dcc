from typing import List

from lark import Token
from lark.visitors import Transformer_NonRecursive

from .models import (
    Binder,
    BlockStmt,
    Function,
    IfStmt,
    LetStmt,
    MacroStmt,
    NegativeExpr,
    NullStmt,
    NumberLiteral,
    Operator,
    Position,
    PrimaryExpr,
    ScopeStmt,
    Stmt,
    StringLiteral,
    UnderLine,
    WhileStmt,
)
from .precedence import resolve


def _position(token: Token) -> Position:
    return Position(token.line, token.column)


def decode_string(token: str) -> str:
    """Strip the quotes and turn the two-character ``\\n`` into a newline."""
    return token[1:-1].replace("\\n", "\n")


class AstBuilder(Transformer_NonRecursive):
    """Turns the lark parse tree of ``BASIC_GRAMMAR`` into model nodes.

    The walk is iterative, so nesting depth is bounded by memory rather than
    by the interpreter recursion limit.
    """

    # --- Program ---

    def start(self, children) -> List[Stmt]:
        return list(children)

    def one_line(self, children):
        stmt = children[0] if children else None
        return NullStmt() if stmt is None else stmt

    # --- Statements ---

    def if_stmt(self, children):
        condition, then_block = children[0], children[1]
        else_block = children[2] if len(children) > 2 else None
        return IfStmt(condition, then_block, else_block)

    def while_stmt(self, children):
        condition, body = children
        return WhileStmt(condition, body)

    def let_stmt(self, children):
        items = [c for c in children if c is not None]
        is_macro = isinstance(items[0], Token) and items[0].type == "MACRO"
        if is_macro:
            items = items[1:]
        named, codes = items[0], items[-1]
        params = items[1] if len(items) == 3 else None
        if is_macro:
            return MacroStmt(named, params, codes)
        return LetStmt(named, params, codes)

    def block(self, children):
        return BlockStmt(tuple(s for s in children if s is not None))

    def scope(self, children):
        return ScopeStmt(tuple(s for s in children if s is not None))

    # --- Expressions ---

    def factors_chain(self, children):
        first = children[0]
        rest = [(children[i], children[i + 1]) for i in range(1, len(children), 2)]
        return resolve(first, rest)

    def negative(self, children):
        _minus, primary = children
        return NegativeExpr(primary)

    def expandable(self, children):
        callee, arguments = children[0], children[1:]
        if not arguments:
            return callee
        return PrimaryExpr(callee, tuple(arguments))

    def function(self, children):
        fun_kw, params, body = children
        return Function(
            tuple((p, None) for p in params), body, pos=_position(fun_kw)
        )

    def params(self, children):
        return tuple(children)

    # --- Terminals ---

    def identifier(self, children):
        (tok,) = children
        return Binder(str(tok), pos=_position(tok))

    def number(self, children):
        (tok,) = children
        return NumberLiteral(int(tok), pos=_position(tok))

    def string(self, children):
        (tok,) = children
        return StringLiteral(decode_string(str(tok)), pos=_position(tok))

    def underline(self, children):
        (tok,) = children
        return UnderLine(pos=_position(tok))

    def op(self, children):
        (tok,) = children
        return Operator(str(tok), pos=_position(tok))
