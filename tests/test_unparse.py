import unittest

import basic_lang
from basic_lang import (
    Binder,
    BinaryExpr,
    Function,
    Macro,
    NativeStmt,
    NegativeExpr,
    NumberLiteral,
    Operator,
    PrimaryExpr,
    StringLiteral,
    UnitLiteral,
    dump,
    unparse,
    unparse_program,
)
from tests.canon_runner import _fixture_names, _parse_fixture


def _bin(left, op, right):
    return BinaryExpr(left, Operator(op), right)


class UnparseTests(unittest.TestCase):
    def assertRoundTrips(self, source: str) -> None:
        first = basic_lang.parse_program(source)
        rendered = unparse_program(first)
        self.assertEqual(basic_lang.parse_program(rendered), first, rendered)

    def test_literals_round_trip(self) -> None:
        for node in (
            NumberLiteral(0),
            NumberLiteral(1234567),
            StringLiteral(""),
            StringLiteral("line one\nline two"),
            StringLiteral('escaped \\"quote\\"'),
        ):
            with self.subTest(node=node):
                self.assertEqual(basic_lang.parse_program(unparse(node)), [node])

    def test_string_newline_is_escaped(self) -> None:
        self.assertEqual(unparse(StringLiteral("a\nb")), '"a\\nb"')

    def test_fixtures_round_trip(self) -> None:
        for name in _fixture_names():
            result = _parse_fixture(name)
            if result.error is not None:
                continue
            with self.subTest(fixture=name):
                self.assertRoundTrips(result.source)

    def test_operands_are_parenthesised_only_when_needed(self) -> None:
        a, b, c = Binder("a"), Binder("b"), Binder("c")
        self.assertEqual(unparse(_bin(_bin(a, "-", b), "-", c)), "a - b - c")
        self.assertEqual(unparse(_bin(a, "-", _bin(b, "-", c))), "a - (b - c)")
        self.assertEqual(unparse(_bin(a, "<-", _bin(b, "<-", c))), "a <- b <- c")
        self.assertEqual(unparse(_bin(_bin(a, "<-", b), "<-", c)), "(a <- b) <- c")
        self.assertEqual(unparse(_bin(_bin(a, "+", b), "*", c)), "(a + b) * c")
        self.assertEqual(unparse(_bin(a, "+", _bin(b, "*", c))), "a + b * c")

    def test_constructed_trees_round_trip(self) -> None:
        a, b, c = Binder("a"), Binder("b"), Binder("c")
        for tree in (
            _bin(_bin(a, "<-", b), "<-", c),
            _bin(a, "*", _bin(b, "%", c)),
            _bin(NegativeExpr(_bin(a, "+", b)), "*", c),
            PrimaryExpr(a, (NegativeExpr(NumberLiteral(1)), PrimaryExpr(b, (c,)))),
            _bin(Function(((a, None),), a), "+", NumberLiteral(1)),
        ):
            with self.subTest(tree=tree):
                self.assertEqual(basic_lang.parse_program(unparse(tree)), [tree])

    def test_conditions_are_wrapped(self) -> None:
        self.assertRoundTrips("if (x) { 1 } else [ 2 ]")
        self.assertRoundTrips("while (f x) { x <- x - 1 }")
        self.assertIn("if (x)", unparse_program(basic_lang.parse_program("if (x) 1")))

    def test_nodes_without_source_form(self) -> None:
        for node in (
            UnitLiteral(),
            Macro((Binder("x"),), Binder("x")),
            NativeStmt("print", (Binder("x"),)),
            Function(((Binder("x"), NumberLiteral(1)),), Binder("x")),
            PrimaryExpr(NumberLiteral(1), (NumberLiteral(2),)),
        ):
            with self.subTest(node=node):
                with self.assertRaises(basic_lang.BasicError):
                    unparse(node)


class DumpTests(unittest.TestCase):
    def test_dump_lists_fields_and_positions(self) -> None:
        (stmt,) = basic_lang.parse_program("let f x = x + 1")
        out = dump(stmt)
        self.assertTrue(out.startswith("LetStmt"))
        self.assertIn("named: Binder text='f' @1:5", out)
        self.assertIn("params:", out)
        self.assertIn("Binder text='x' @1:7", out)
        self.assertIn("op: Operator op_str='+' @1:13", out)
        self.assertIn("right: NumberLiteral value=1 @1:15", out)

    def test_dump_of_empty_block(self) -> None:
        (stmt,) = basic_lang.parse_program("{ }")
        self.assertEqual(dump(stmt), "BlockStmt\n  stmts: []")


if __name__ == "__main__":
    unittest.main(verbosity=2)
