"""Tests for proofs.forest module."""

import unittest

import networkx as nx

from proofforest.core.logic import Variable, eq
from proofforest.exceptions import UnknownNodeError
from proofforest.proofs.forest import ProofForest, ProofStatus
from proofforest.proofs.state import ProofState
from proofforest.proofs.tactics import Simplify


class TestProofForest(unittest.TestCase):
    """Test ProofForest class."""

    def setUp(self):
        """Create a forest with a root and one child."""
        self.x = Variable("x")
        self.forest = ProofForest()
        self.root_state = ProofState(eq(self.x + 0, self.x), path="p0")
        self.root = self.forest.add_node(None, self.root_state, note="root")
        self.child = self.forest.add_node(self.root, self.root_state.with_path("p0_1"),
                                          Simplify(self.x), note="step")

    def test_ids_strictly_increase(self):
        """Test that ids are allocated in increasing order and never reused."""
        ids = [self.root, self.child]
        for _ in range(10):
            ids.append(self.forest.add_node(self.child, self.root_state))
        self.assertEqual(ids, sorted(set(ids)))
        self.assertEqual(self.forest.next_id, len(ids))

    def test_parent_children_consistency(self):
        """Test that parent and children links agree."""
        grandchild = self.forest.add_node(self.child, self.root_state)
        for node in self.forest:
            for child in node.children:
                self.assertEqual(self.forest.get_node(child).parent, node.id)
            if node.parent is not None:
                self.assertIn(node.id, self.forest.children_of(node.parent))
        self.assertEqual(self.forest.children_of(self.child), [grandchild])

    def test_roots(self):
        """Test that roots are exactly the parentless nodes."""
        other_root = self.forest.add_node(None, self.root_state)
        self.assertEqual(self.forest.roots, [self.root, other_root])
        self.assertEqual([n.id for n in self.forest if n.parent is None], self.forest.roots)
        self.assertIsNone(self.forest.get_node(self.root).tactic)

    def test_missing_parent(self):
        """Test that inserting under an unknown parent fails."""
        with self.assertRaises(UnknownNodeError):
            self.forest.add_node(99, self.root_state)
        self.assertEqual(len(self.forest), 2)

    def test_get_node(self):
        """Test node lookup."""
        self.assertIn(self.child, self.forest)
        self.assertNotIn(42, self.forest)
        with self.assertRaises(KeyError):
            self.forest.get_node(42)

    def test_default_status(self):
        """Test that new nodes are in progress."""
        self.assertEqual(self.forest.get_node(self.child).status, ProofStatus.IN_PROGRESS)

    def test_get_path(self):
        """Test that paths run from the root to the node."""
        grandchild = self.forest.add_node(self.child, self.root_state)
        path = self.forest.get_path(grandchild)
        self.assertEqual(path, [self.root, self.child, grandchild])
        self.assertIsNone(self.forest.get_node(path[0]).parent)

    def test_bookmarks(self):
        """Test bookmark round trip after many insertions."""
        self.forest.add_bookmark("start", self.child)
        for _ in range(50):
            self.forest.add_node(self.root, self.root_state)
        self.assertEqual(self.forest.get_bookmark("start"), self.child)
        self.assertIsNone(self.forest.get_bookmark("missing"))
        with self.assertRaises(UnknownNodeError):
            self.forest.add_bookmark("bad", 1000)

    def test_status_mutators(self):
        """Test the explicit status mutators."""
        self.forest.mark_complete(self.child)
        self.assertEqual(self.forest.completed_nodes()[0].id, self.child)
        self.forest.mark_wip(self.child)
        self.assertEqual(self.forest.get_node(self.child).status, ProofStatus.WIP)
        self.forest.mark_todo(self.root)
        self.forest.mark_abandoned(self.child)
        self.assertEqual([n.id for n in self.forest.nodes_with_status(ProofStatus.TODO)], [self.root])
        self.assertEqual(self.forest.completed_nodes(), [])
        self.forest.mark_in_progress(self.child)
        self.assertEqual(self.forest.get_node(self.child).status, ProofStatus.IN_PROGRESS)

    def test_status_change_keeps_state(self):
        """Test that marking a node does not touch its state."""
        node = self.forest.get_node(self.child)
        state = node.state
        self.forest.mark_complete(self.child)
        self.assertIs(self.forest.get_node(self.child).state, state)

    def test_leaves_and_root_state(self):
        """Test leaf listing and the root state."""
        self.assertEqual([n.id for n in self.forest.leaves()], [self.child])
        self.assertIs(self.forest.get_root_state(), self.root_state)
        self.assertIsNone(ProofForest().get_root_state())

    def test_branch_completion(self):
        """Test that a branch is complete when every live leaf below it is."""
        self.assertFalse(self.forest.is_branch_complete(self.root))
        self.forest.mark_complete(self.child)
        self.assertTrue(self.forest.is_branch_complete(self.root))
        self.assertTrue(self.forest.is_fully_proven())

        dead_end = self.forest.add_node(self.root, self.root_state)
        self.forest.mark_abandoned(dead_end)
        self.assertTrue(self.forest.is_branch_complete(self.root))

        open_step = self.forest.add_node(self.root, self.root_state)
        self.assertFalse(self.forest.is_fully_proven())
        self.forest.mark_complete(open_step)
        self.assertTrue(self.forest.is_fully_proven())

    def test_branch_completion_edge_cases(self):
        """Test abandoned-only children, extra roots, empty forests and unknown nodes."""
        self.forest.mark_complete(self.child)
        stuck = self.forest.add_node(self.child, self.root_state)
        self.forest.mark_abandoned(stuck)
        self.assertFalse(self.forest.is_branch_complete(self.child))
        self.assertFalse(self.forest.is_branch_complete(self.root))
        self.assertFalse(self.forest.is_branch_complete(stuck))

        self.assertFalse(ProofForest().is_fully_proven())
        with self.assertRaises(UnknownNodeError):
            self.forest.is_branch_complete(42)

    def test_visualize(self):
        """Test the text rendering of the forest."""
        self.forest.add_bookmark("start", self.root)
        self.forest.mark_complete(self.child)
        expected = (
            "Proof Forest:\n"
            "→ Node 0 (path: p0) - root\n"
            "  ✓ Node 1 [Simplified x] (path: p0_1) - step\n"
            "\n"
            "Bookmarks:\n"
            "  start -> Node 0\n"
        )
        self.assertEqual(self.forest.visualize(), expected)

    def test_to_graph(self):
        """Test exporting the forest as a directed graph."""
        graph = self.forest.to_graph()
        self.assertIsInstance(graph, nx.DiGraph)
        self.assertEqual(set(graph.nodes), {self.root, self.child})
        self.assertEqual(list(graph.edges), [(self.root, self.child)])
        self.assertEqual(graph.nodes[self.child]["path"], "p0_1")
        self.assertTrue(nx.is_directed_acyclic_graph(graph))


if __name__ == '__main__':
    unittest.main()
