"""Tests for proofs.theorem module."""

import unittest

from proofforest import start_proof
from proofforest.core.logic import Variable, eq
from proofforest.exceptions import EmptyForestError, UnknownBookmarkError, UnknownNodeError
from proofforest.proofs.forest import ProofForest
from proofforest.proofs.state import ObjectKind, QuantifiedObject
from proofforest.proofs.theorem import TheoremBuilder, theorem_id


class TestTheoremBuilder(unittest.TestCase):
    """Test TheoremBuilder class."""

    def setUp(self):
        """Create a builder with one assumption."""
        self.x = Variable("x")
        self.statement = eq(self.x + 0, self.x)
        self.assumption = QuantifiedObject("x", ObjectKind.INTEGER)
        self.builder = TheoremBuilder("Add Zero", self.statement, [self.assumption])

    def test_seeds_single_root(self):
        """Test that construction creates exactly one root."""
        forest = self.builder.forest
        self.assertEqual(len(forest), 1)
        root = forest.get_node(forest.roots[0])
        self.assertEqual(root.note, "Initial state for theorem: Add Zero")
        self.assertEqual(root.state.path, "p0")
        self.assertEqual(root.state.quantifiers, (self.assumption,))

    def test_build(self):
        """Test the built theorem artifact."""
        self.builder.initial_branch().simplify(self.x + 0).mark_complete()
        theorem = self.builder.build()
        self.assertEqual(theorem.id, "thm_add_zero")
        self.assertEqual(theorem.name, "Add Zero")
        self.assertEqual(theorem.description, "Theorem: Add Zero")
        self.assertEqual(theorem.statement, self.statement)
        self.assertEqual(theorem.initial_proof_state.path, "p0")

    def test_theorem_id(self):
        """Test id derivation from names."""
        self.assertEqual(theorem_id("Group Inverse Unique"), "thm_group_inverse_unique")

    def test_branch_at(self):
        """Test branches at arbitrary nodes."""
        p1 = self.builder.initial_branch().simplify(self.x + 0)
        branch = self.builder.branch_at(p1.node_id)
        self.assertEqual(branch.path, f"p{p1.node_id}")
        self.assertEqual(branch.state, p1.state)
        with self.assertRaises(UnknownNodeError):
            self.builder.branch_at(99)

    def test_branch_at_bookmark(self):
        """Test resolving bookmarks to branches."""
        p1 = self.builder.initial_branch().simplify(self.x + 0).bookmark("after simplify")
        self.assertEqual(self.builder.branch_at_bookmark("after simplify").node_id, p1.node_id)
        with self.assertRaises(UnknownBookmarkError):
            self.builder.branch_at_bookmark("nowhere")

    def test_empty_forest(self):
        """Test that a rootless forest has no initial branch."""
        self.builder.forest = ProofForest()
        with self.assertRaises(EmptyForestError):
            self.builder.initial_branch()

    def test_completed_paths(self):
        """Test the witnessing paths of completed nodes."""
        p0 = self.builder.initial_branch()
        p1 = p0.simplify(self.x + 0)
        p2 = p1.intro("y").mark_complete()
        p0.branch().intro("z").mark_abandoned()
        self.assertEqual([n.id for n in self.builder.completed_nodes()], [p2.node_id])
        self.assertEqual(self.builder.completed_paths(), [[p0.node_id, p1.node_id, p2.node_id]])

    def test_is_fully_proven(self):
        """Test that the proof is finished once every case is complete."""
        p0 = self.builder.initial_branch()
        result = p0.cases(["x even", "x odd"])
        self.assertFalse(self.builder.is_fully_proven())
        result.case(0).mark_complete()
        self.assertFalse(self.builder.is_fully_proven())
        result.case(1).simplify(self.x + 0).mark_complete()
        self.assertTrue(self.builder.is_fully_proven())

    def test_start_proof_parses_text(self):
        """Test starting a proof from a text statement."""
        builder = start_proof("Add zero", "x + 0 = x")
        self.assertEqual(builder.statement, self.statement)
        self.assertEqual(builder.build().id, "thm_add_zero")


if __name__ == '__main__':
    unittest.main()
