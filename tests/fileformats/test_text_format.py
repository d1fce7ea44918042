"""Tests for fileformats.text module."""

import os
import tempfile
import unittest
from fractions import Fraction
from pathlib import Path

from proofforest.core.logic import (
    Variable, Number, Operation, ViewAs, RelationExpression,
    Equal, Predicate, Not, Or, Implies, eq, op, pred
)
from proofforest.fileformats import (
    FormatRegistry, TextFormat, get_format_handler, parse_statement, parse_expression, format_term
)


class TestParsing(unittest.TestCase):
    """Test parsing statements and expressions."""

    def setUp(self):
        """Create test variables."""
        self.a = Variable("a")
        self.b = Variable("b")
        self.c = Variable("c")
        self.x = Variable("x")
        self.n = Variable("n")

    def test_fraction_reads_back_as_division(self):
        """Test that a printed Fraction parses as a division, not a Number."""
        statement = eq(self.x, Number(Fraction(1, 2)))
        self.assertEqual(str(statement), "x = 1/2")
        self.assertEqual(parse_statement(str(statement)), eq(self.x, op("/", 1, 2)))
        self.assertNotEqual(parse_statement(str(statement)), statement)

    def test_equation(self):
        """Test parsing a simple equation."""
        self.assertEqual(parse_statement("x + 0 = x"), eq(self.x + 0, self.x))

    def test_precedence_and_associativity(self):
        """Test operator precedence and left associativity."""
        self.assertEqual(parse_expression("a + b * c"), self.a + self.b * self.c)
        self.assertEqual(parse_expression("a - b - c"), (self.a - self.b) - self.c)
        self.assertEqual(parse_expression("(a + b) * c"), (self.a + self.b) * self.c)
        self.assertEqual(parse_expression("a ^ b ^ c"), self.a ** (self.b ** self.c))
        self.assertEqual(parse_expression("-x ^ 2"), (-self.x) ** 2)

    def test_functions_and_views(self):
        """Test named functions, views and embedded relations."""
        self.assertEqual(parse_expression("f(x, 1)"), op("f", self.x, 1))
        self.assertEqual(parse_expression("f()"), Operation("f", ()))
        self.assertEqual(parse_expression("g as group_element"), ViewAs(Variable("g"), "group_element"))
        self.assertEqual(parse_expression("assoc"), Variable("assoc"))
        self.assertEqual(parse_expression("[a = b]"), RelationExpression(Equal(self.a, self.b)))
        self.assertEqual(parse_expression("1.5"), Number(1.5))

    def test_connectives(self):
        """Test parsing logical connectives."""
        even, odd = pred("even", self.n), pred("odd", self.n)
        self.assertEqual(parse_statement("even(n) | odd(n)"), Or((even, odd)))
        self.assertEqual(parse_statement("~even(n)"), Not(even))
        self.assertEqual(parse_statement("even(n) -> odd(n) -> even(n)"),
                         Implies(even, Implies(odd, even)))
        self.assertEqual(parse_statement("p()"), Predicate("p", ()))

    def test_comparisons(self):
        """Test parsing comparison predicates."""
        A, B = Variable("A"), Variable("B")
        statement = parse_statement("x ∈ A -> x ∈ A ∪ B")
        self.assertEqual(statement, Implies(pred("∈", self.x, A), pred("∈", self.x, op("∪", A, B))))
        self.assertEqual(parse_statement("a <= b"), pred("<=", self.a, self.b))

    def test_printed_terms_parse_back(self):
        """Test that printed statements read back to the same text."""
        for text in [
            "x + 0 = x",
            "(a * b) * c = a * (b * c)",
            "~(even(n) & odd(n))",
            "even(n) -> (even(n) | odd(n))",
            "a <= b <-> b >= a",
            "f(g as group_element) = e",
            "-(a + b) = -a - b",
        ]:
            with self.subTest(text=text):
                self.assertEqual(format_term(parse_statement(text)), text)

    def test_invalid_input(self):
        """Test that malformed input raises ValueError."""
        for text in ["x + = 1", "x", "even(n) &", ""]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_statement(text)


class TestFormatRegistry(unittest.TestCase):
    """Test looking up format handlers."""

    def test_by_name(self):
        """Test getting handlers by name."""
        handler = get_format_handler("TEXT")
        self.assertIsInstance(handler, TextFormat)
        self.assertEqual(handler.name, "text")
        with self.assertRaises(ValueError):
            get_format_handler("latex")

    def test_by_file(self):
        """Test getting handlers by file extension."""
        self.assertIsInstance(get_format_handler(file_path="goal.stmt"), TextFormat)
        with self.assertRaises(ValueError):
            get_format_handler(file_path=Path("goal.tex"))
        with self.assertRaises(ValueError):
            get_format_handler()

    def test_register_format(self):
        """Test registering another format and looking it up by name and extension."""
        class InfixFormat(TextFormat):
            @property
            def name(self):
                return "infix"

            @property
            def extensions(self):
                return [".infix"]

        registry = FormatRegistry()
        self.assertEqual(registry.list_formats(), ["text"])
        registry.register("Infix", InfixFormat)
        self.assertEqual(registry.list_formats(), ["text", "infix"])

        self.assertIsInstance(registry.get_handler("infix"), InfixFormat)
        self.assertIsInstance(registry.get_handler_for_file(Path("goal.infix")), InfixFormat)
        self.assertNotIsInstance(registry.get_handler_for_file(Path("goal.txt")), InfixFormat)
        with self.assertRaises(ValueError):
            registry.get_handler_for_file(Path("goal.tex"))

    def test_file_round_trip(self):
        """Test writing and reading a statement file."""
        handler = TextFormat()
        x = Variable("x")
        statement = eq(x + 1, op("f", x))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(os.path.join(tmpdir, "goal.stmt"))
            handler.write_file(statement, path)
            self.assertEqual(handler.parse_file(path), statement)


if __name__ == '__main__':
    unittest.main()
