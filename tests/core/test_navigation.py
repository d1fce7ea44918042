"""Tests for core.navigation module."""

import unittest

from proofforest.core.logic import Equal, Number, Operation, Variable, And, eq, pred
from proofforest.core.navigation import (
    locate, subterm_at, replace, replace_all, find_all, iter_subterms
)
from proofforest.exceptions import InvalidPositionError


class TestLocate(unittest.TestCase):
    """Test finding subterms."""

    def setUp(self):
        """Create the statement (x + y) * x = x."""
        self.x = Variable("x")
        self.y = Variable("y")
        self.sum = self.x + self.y
        self.statement = Equal(self.sum * self.x, self.x)

    def test_subterm_at(self):
        """Test following positions."""
        self.assertEqual(subterm_at(self.statement, ()), self.statement)
        self.assertEqual(subterm_at(self.statement, (0, 0)), self.sum)
        self.assertEqual(subterm_at(self.statement, (0, 0, 1)), self.y)
        self.assertIsNone(subterm_at(self.statement, (2,)))
        self.assertIsNone(subterm_at(self.statement, (1, 0)))

    def test_first_match_is_preorder(self):
        """Test that the first occurrence in pre-order, left to right, is returned."""
        found = locate(self.statement, self.x)
        self.assertEqual(found, (self.x, (0, 0, 0)))

    def test_not_found(self):
        """Test searching for an absent pattern."""
        self.assertIsNone(locate(self.statement, Variable("z")))

    def test_position_is_rederived(self):
        """Test that an explicit position is checked against the statement."""
        self.assertEqual(locate(self.statement, position=(1,)), (self.x, (1,)))
        self.assertEqual(locate(self.statement, self.x, [1]), (self.x, (1,)))
        self.assertIsNone(locate(self.statement, self.y, (1,)))
        self.assertIsNone(locate(self.statement, self.x, (5, 0)))

    def test_requires_pattern_or_position(self):
        """Test that locate needs something to look for."""
        with self.assertRaises(ValueError):
            locate(self.statement)

    def test_find_all(self):
        """Test listing every occurrence."""
        self.assertEqual(find_all(self.statement, self.x), [(0, 0, 0), (0, 1), (1,)])
        self.assertEqual(find_all(self.statement, Number(7)), [])

    def test_iter_subterms(self):
        """Test pre-order traversal."""
        positions = [position for position, _ in iter_subterms(self.sum)]
        self.assertEqual(positions, [(), (0,), (1,)])


class TestReplace(unittest.TestCase):
    """Test rewriting subterms."""

    def setUp(self):
        """Create test statement."""
        self.x = Variable("x")
        self.y = Variable("y")
        self.left = self.x * self.y
        self.right = self.x + Number(1)
        self.statement = Equal(self.left, self.right)

    def test_replace_shares_untouched_subtrees(self):
        """Test that only the path to the replaced subterm is rebuilt."""
        result = replace(self.statement, (1, 1), Number(2))
        self.assertEqual(result, Equal(self.left, self.x + Number(2)))
        self.assertIs(result.left, self.left)
        self.assertEqual(self.statement, Equal(self.x * self.y, self.x + Number(1)))

    def test_replace_root(self):
        """Test that the empty position replaces the whole statement."""
        other = eq(self.y, 0)
        self.assertIs(replace(self.statement, (), other), other)

    def test_replace_invalid_position(self):
        """Test that a position outside the statement is an error."""
        with self.assertRaises(InvalidPositionError):
            replace(self.statement, (0, 3), self.y)
        with self.assertRaises(IndexError):
            replace(self.statement, (1, 0, 0), self.y)

    def test_replace_wrong_kind(self):
        """Test that a relation cannot replace an expression."""
        with self.assertRaises(TypeError):
            replace(self.statement, (0,), eq(self.x, self.y))

    def test_replace_all(self):
        """Test replacing every occurrence."""
        result = replace_all(self.statement, self.x, self.y)
        self.assertEqual(result, Equal(self.y * self.y, self.y + Number(1)))

    def test_replace_all_in_connectives(self):
        """Test replacing inside nested relations."""
        statement = And((pred("even", self.x), eq(self.x, self.y)))
        result = replace_all(statement, self.x, Operation("f", (self.y,)))
        self.assertEqual(str(result), "even(f(y)) & f(y) = y")


if __name__ == '__main__':
    unittest.main()
