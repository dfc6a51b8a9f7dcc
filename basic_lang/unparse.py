"""Rendering of model nodes back to source text, plus a debug tree dump.

``unparse`` produces text that parses back to a structurally equal tree:
binary operands are parenthesised exactly where the precedence resolver would
otherwise regroup them, and conditions are always wrapped so a following
block is not taken as a call argument.
"""

import dataclasses
from typing import Any, Iterable, List

from .exceptions import BasicError
from .models import (
    Binder,
    BinaryExpr,
    BlockStmt,
    Function,
    NullStmt,
    NumberLiteral,
    PrimaryExpr,
    ScopeStmt,
    StringLiteral,
    UnderLine,
)

INDENT = "    "

_ATOMS = (Binder, NumberLiteral, StringLiteral, UnderLine)


class Unparser:
    def __init__(self, indent: str = INDENT):
        self.indent = indent
        self.level = 0

    def render(self, node: Any) -> str:
        method = getattr(self, "visit_" + type(node).__name__, None)
        if method is None:
            raise BasicError(f"{type(node).__name__} has no source form")
        return method(node)

    def program(self, stmts: Iterable[Any]) -> str:
        return "".join(self.render(s) + "\n" for s in stmts)

    # --- Operands ---

    def visit_Binder(self, node):
        return node.text

    def visit_NumberLiteral(self, node):
        return str(node.value)

    def visit_StringLiteral(self, node):
        return '"' + node.literal.replace("\n", "\\n") + '"'

    def visit_UnderLine(self, node):
        return "_"

    def visit_Function(self, node):
        names = []
        for binder, value in node.params:
            if value is not None:
                raise BasicError(
                    f"Parameter '{binder.text}' is already bound and has no source form"
                )
            names.append(binder.text)
        return f"fun {' '.join(names)} -> {self.render(node.body)}"

    def visit_Operator(self, node):
        return node.op_str

    # --- Expressions ---

    def visit_NegativeExpr(self, node):
        return "-" + self._primary(node.primary)

    def visit_BinaryExpr(self, node):
        op = node.op
        left, right = node.left, node.right
        left_src = self._operand(left)
        if isinstance(left, BinaryExpr) and (
            left.op.priority < op.priority
            or (left.op.priority == op.priority and not op.left_assoc)
        ):
            left_src = f"({left_src})"
        right_src = self._operand(right)
        if isinstance(right, BinaryExpr) and (
            right.op.priority < op.priority
            or (right.op.priority == op.priority and op.left_assoc)
        ):
            right_src = f"({right_src})"
        return f"{left_src} {op.op_str} {right_src}"

    def visit_PrimaryExpr(self, node):
        if not isinstance(node.child, Binder):
            raise BasicError("Only a name can be applied to arguments in source form")
        parts = [node.child.text]
        for arg in node.arguments:
            if isinstance(arg, _ATOMS + (BlockStmt, ScopeStmt)):
                parts.append(self.render(arg))
            else:
                parts.append(f"({self.render(arg)})")
        return " ".join(parts)

    # --- Statements ---

    def visit_NullStmt(self, node):
        return ""

    def visit_BlockStmt(self, node):
        return self._stmt_list("{", node.stmts, "}")

    def visit_ScopeStmt(self, node):
        return self._stmt_list("[", node.stmts, "]")

    def visit_IfStmt(self, node):
        text = f"if {self._condition(node.condition)} {self.render(node.then_block)}"
        if node.else_block is not None:
            text += f" else {self.render(node.else_block)}"
        return text

    def visit_WhileStmt(self, node):
        return f"while {self._condition(node.condition)} {self.render(node.body)}"

    def visit_LetStmt(self, node):
        return self._binding("let", node)

    def visit_MacroStmt(self, node):
        return self._binding("let macro", node)

    # --- Helpers ---

    def _binding(self, keyword: str, node) -> str:
        head = [keyword, node.named.text]
        if node.params:
            head.extend(p.text for p in node.params)
        return f"{' '.join(head)} = {self.render(node.codes)}"

    def _stmt_list(self, opening: str, stmts, closing: str) -> str:
        body = [s for s in stmts if not isinstance(s, NullStmt)]
        if not body:
            return opening + closing
        self.level += 1
        try:
            pad = self.indent * self.level
            lines = [pad + self.render(s) for s in body]
        finally:
            self.level -= 1
        return opening + "\n" + "\n".join(lines) + "\n" + self.indent * self.level + closing

    def _operand(self, node) -> str:
        if isinstance(node, Function):
            return f"({self.render(node)})"
        return self.render(node)

    def _primary(self, node) -> str:
        if isinstance(node, (Binder, NumberLiteral, StringLiteral, PrimaryExpr)):
            return self.render(node)
        return f"({self.render(node)})"

    def _condition(self, node) -> str:
        if isinstance(node, (NumberLiteral, StringLiteral)):
            return self.render(node)
        return f"({self.render(node)})"


def unparse(node: Any) -> str:
    return Unparser().render(node)


def unparse_program(stmts: Iterable[Any]) -> str:
    return Unparser().program(stmts)


def dump(node: Any, indent: str = "  ") -> str:
    """Indented debug listing of a tree, with recorded positions."""
    lines: List[str] = []
    _dump_into(lines, node, 0, indent, "")
    return "\n".join(lines)


def _dump_into(lines: List[str], node: Any, depth: int, indent: str, label: str) -> None:
    pad = indent * depth + label
    if isinstance(node, (list, tuple)):
        if not node:
            lines.append(pad + "[]")
            return
        lines.append(pad.rstrip() if label else indent * depth + "-")
        for item in node:
            _dump_into(lines, item, depth + 1, indent, "")
        return
    if not dataclasses.is_dataclass(node):
        lines.append(pad + repr(node))
        return

    name = type(node).__name__
    scalars = []
    children = []
    for f in dataclasses.fields(node):
        if f.name in ("pos", "outer_env"):
            continue
        value = getattr(node, f.name)
        if dataclasses.is_dataclass(value) or isinstance(value, (list, tuple)):
            children.append((f.name, value))
        else:
            scalars.append(f"{f.name}={value!r}")
    head = name
    if scalars:
        head += " " + " ".join(scalars)
    pos = getattr(node, "pos", None)
    if pos is not None:
        head += f" @{pos}"
    lines.append(pad + head)
    for field_name, value in children:
        _dump_into(lines, value, depth + 1, indent, f"{field_name}: ")
