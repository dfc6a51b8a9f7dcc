import unittest
import pytest

import basic_lang

hypothesis = pytest.importorskip("hypothesis")
strategies = hypothesis.strategies

_numbers = strategies.integers(min_value=0, max_value=99).map(str)
_operators = strategies.sampled_from(["+", "-", "*"])


def _chain(operand):
    return strategies.tuples(
        operand, strategies.lists(strategies.tuples(_operators, operand), max_size=4)
    ).map(lambda t: t[0] + "".join(f" {op} {rhs}" for op, rhs in t[1]))


_arithmetic = strategies.recursive(
    _numbers,
    lambda inner: _chain(strategies.one_of(_numbers, inner.map(lambda s: f"({s})"))),
    max_leaves=12,
)

_program_alphabet = strategies.sampled_from(
    list("abfx01 _;\n{}[]()+-*<=\"") + ["let ", "if ", "fun ", "while ", "->", "<-", "else "]
)


def _evaluate(node) -> int:
    if isinstance(node, basic_lang.NumberLiteral):
        return node.value
    if isinstance(node, basic_lang.NegativeExpr):
        return -_evaluate(node.primary)
    left, right = _evaluate(node.left), _evaluate(node.right)
    return {"+": left + right, "-": left - right, "*": left * right}[node.op.op_str]


class FuzzTests(unittest.TestCase):
    @hypothesis.given(_arithmetic)
    def test_resolved_tree_matches_infix_arithmetic(self, source: str) -> None:
        (tree,) = basic_lang.parse_program(source)
        self.assertEqual(_evaluate(tree), eval(source))

    @hypothesis.given(_arithmetic)
    def test_rendered_arithmetic_reparses_identically(self, source: str) -> None:
        stmts = basic_lang.parse_program(source)
        self.assertEqual(basic_lang.parse_program(basic_lang.unparse_program(stmts)), stmts)

    @hypothesis.given(strategies.text())
    def test_fuzz_parser_stability(self, trash_text: str) -> None:
        try:
            basic_lang.parse_program(trash_text)
        except basic_lang.ParseError:
            # Expected failure path for invalid programs.
            return

    @hypothesis.given(strategies.lists(_program_alphabet, max_size=30).map("".join))
    def test_fuzz_token_soup(self, soup: str) -> None:
        try:
            stmts = basic_lang.parse_program(soup)
        except basic_lang.ParseError as e:
            self.assertGreaterEqual(e.line, 1)
            self.assertGreaterEqual(e.column, 1)
            return
        for stmt in stmts:
            self.assertTrue(basic_lang.is_stmt(stmt))


if __name__ == "__main__":
    unittest.main(verbosity=2)
