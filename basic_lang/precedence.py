from typing import List, Sequence, Tuple

from .exceptions import ResolverError
from .models import DUMMY, BinaryExpr, Expr, Operator

Pair = Tuple[Operator, Expr]


def make_binary_expr(pairs: Sequence[Pair], start: int, stop: int) -> Expr:
    """Fold ``pairs[start:stop]`` into a single expression.

    Each pair is ``(operator, operand)`` where the operator joins the operand
    to everything on its left; the operator of the first pair in the range is
    ignored. The lowest-priority operator becomes the root. Between operators
    of equal priority a left-associative one groups to the left, so
    ``a - b - c`` is ``(a - b) - c`` while ``a <- b <- c`` is ``a <- (b <- c)``.

    The fold keeps its own operand and operator stacks, so chains of any
    length are built in a single pass.
    """
    if not 0 <= start < stop <= len(pairs):
        raise ResolverError(f"Invalid operand range [{start}, {stop}) of {len(pairs)}")

    operands: List[Expr] = [pairs[start][1]]
    operators: List[Operator] = []
    for i in range(start + 1, stop):
        op, operand = pairs[i]
        while operators and (
            operators[-1].priority > op.priority
            or (operators[-1].priority == op.priority and op.left_assoc)
        ):
            _reduce(operands, operators)
        operators.append(op)
        operands.append(operand)
    while operators:
        _reduce(operands, operators)
    return operands[0]


def _reduce(operands: List[Expr], operators: List[Operator]) -> None:
    right = operands.pop()
    left = operands.pop()
    operands.append(BinaryExpr(left, operators.pop(), right))


def resolve(first: Expr, rest: Sequence[Pair] = ()) -> Expr:
    """Resolve ``first op1 operand1 op2 operand2 ...`` into a tree."""
    pairs: List[Pair] = [(Operator(DUMMY), first)]
    pairs.extend(rest)
    return make_binary_expr(pairs, 0, len(pairs))
