"""The proof forest: an append-only store of explored proof steps."""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

import networkx as nx

from proofforest.exceptions import UnknownNodeError
from .state import ProofState
from .tactics import Tactic, describe_tactic


logger = logging.getLogger(__name__)


class ProofStatus(Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    WIP = "wip"
    COMPLETE = "complete"
    ABANDONED = "abandoned"

    @property
    def symbol(self) -> str:
        return _STATUS_SYMBOLS[self]


_STATUS_SYMBOLS = {
    ProofStatus.TODO: "□",
    ProofStatus.IN_PROGRESS: "→",
    ProofStatus.WIP: "●",
    ProofStatus.COMPLETE: "✓",
    ProofStatus.ABANDONED: "✗",
}


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ProofNode:
    """One explored proof step.

    ``tactic`` is None only for roots. ``state`` is never replaced after
    insertion; only ``status`` and ``children`` change.
    """
    id: int
    parent: Optional[int]
    state: ProofState
    tactic: Optional[Tactic] = None
    note: str = ""
    status: ProofStatus = ProofStatus.IN_PROGRESS
    children: List[int] = field(default_factory=list)
    created_at: int = field(default_factory=_now_ms)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class ProofForest:
    """A forest of proof nodes shared by every branch exploring it.

    Node ids are allocated from a counter that only increases, so ids are
    never reused. Nodes are never removed or re-parented.
    """

    def __init__(self):
        self.nodes: Dict[int, ProofNode] = {}
        self.roots: List[int] = []
        self.bookmarks: Dict[str, int] = {}
        self.next_id = 0
        self._lock = threading.RLock()

    def add_node(self,
                 parent: Optional[int],
                 state: ProofState,
                 tactic: Optional[Tactic] = None,
                 note: str = "",
                 status: ProofStatus = ProofStatus.IN_PROGRESS) -> int:
        """
        Insert a new node and link it to its parent.

        Args:
            parent: Id of the parent node, or None for a new root
            state: Proof state held by the node
            tactic: Tactic that produced the state; None for roots
            note: Free-form annotation
            status: Initial status

        Returns:
            The id of the new node

        Raises:
            UnknownNodeError: If ``parent`` is not in the forest
        """
        with self._lock:
            if parent is not None and parent not in self.nodes:
                raise UnknownNodeError(parent)

            node_id = self.next_id
            self.next_id += 1
            self.nodes[node_id] = ProofNode(node_id, parent, state, tactic, note, status)
            if parent is None:
                self.roots.append(node_id)
            else:
                self.nodes[parent].children.append(node_id)

        logger.debug("Added node %d under %s (%s)", node_id, parent, state.path)
        return node_id

    def get_node(self, node_id: int) -> ProofNode:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ProofNode]:
        """Iterate over nodes in insertion order."""
        return iter(list(self.nodes.values()))

    def children_of(self, node_id: int) -> List[int]:
        return list(self.get_node(node_id).children)

    def add_bookmark(self, name: str, node_id: int):
        """Name a node so it can be found again. Re-using a name moves it."""
        with self._lock:
            if node_id not in self.nodes:
                raise UnknownNodeError(node_id)
            self.bookmarks[name] = node_id
        logger.debug("Bookmarked node %d as '%s'", node_id, name)

    def get_bookmark(self, name: str) -> Optional[int]:
        return self.bookmarks.get(name)

    def get_path(self, node_id: int) -> List[int]:
        """Node ids from the root down to ``node_id``."""
        path = []
        current: Optional[int] = node_id
        while current is not None:
            path.append(current)
            current = self.get_node(current).parent
        path.reverse()
        return path

    def get_root_state(self) -> Optional[ProofState]:
        """State of the first root, or None for an empty forest."""
        if not self.roots:
            return None
        return self.nodes[self.roots[0]].state

    # Status mutators

    def set_status(self, node_id: int, status: ProofStatus):
        with self._lock:
            node = self.get_node(node_id)
            previous = node.status
            node.status = status
        logger.debug("Node %d: %s -> %s", node_id, previous.value, status.value)

    def mark_complete(self, node_id: int):
        self.set_status(node_id, ProofStatus.COMPLETE)

    def mark_wip(self, node_id: int):
        self.set_status(node_id, ProofStatus.WIP)

    def mark_todo(self, node_id: int):
        self.set_status(node_id, ProofStatus.TODO)

    def mark_abandoned(self, node_id: int):
        self.set_status(node_id, ProofStatus.ABANDONED)

    def mark_in_progress(self, node_id: int):
        self.set_status(node_id, ProofStatus.IN_PROGRESS)

    # Queries

    def nodes_with_status(self, status: ProofStatus) -> List[ProofNode]:
        return [node for node in self.nodes.values() if node.status == status]

    def completed_nodes(self) -> List[ProofNode]:
        return self.nodes_with_status(ProofStatus.COMPLETE)

    def leaves(self) -> List[ProofNode]:
        return [node for node in self.nodes.values() if node.is_leaf]

    def is_branch_complete(self, node_id: int) -> bool:
        """Whether every line of reasoning below ``node_id`` ends in a COMPLETE leaf.

        ABANDONED children are skipped, so a node whose children are all
        abandoned is not complete. This only reports on statuses; case
        splits are never checked for exhaustiveness.

        Raises:
            UnknownNodeError: If the node is not in the forest
        """
        with self._lock:
            if node_id not in self.nodes:
                raise UnknownNodeError(node_id)
            graph = nx.DiGraph()
            graph.add_node(node_id)
            graph.add_edges_from((node.parent, node.id) for node in self.nodes.values()
                                 if node.parent is not None)

            complete: Dict[int, bool] = {}
            for current in nx.dfs_postorder_nodes(graph, node_id):
                node = self.nodes[current]
                if node.is_leaf:
                    complete[current] = node.status == ProofStatus.COMPLETE
                    continue
                live = [child for child in node.children
                        if self.nodes[child].status != ProofStatus.ABANDONED]
                complete[current] = bool(live) and all(complete[child] for child in live)
            return complete[node_id]

    def is_fully_proven(self) -> bool:
        """Whether every root is a complete branch; False for an empty forest."""
        with self._lock:
            roots = list(self.roots)
        return bool(roots) and all(self.is_branch_complete(root) for root in roots)

    def visualize(self) -> str:
        """Render the forest as an indented text tree followed by the bookmarks."""
        lines = ["Proof Forest:"]
        for root in self.roots:
            self._visualize_node(root, 0, lines)

        if self.bookmarks:
            lines.append("")
            lines.append("Bookmarks:")
            for name, node_id in self.bookmarks.items():
                lines.append(f"  {name} -> Node {node_id}")

        return "\n".join(lines) + "\n"

    def _visualize_node(self, node_id: int, depth: int, lines: List[str]):
        node = self.nodes[node_id]
        line = f"{'  ' * depth}{node.status.symbol} Node {node.id}"
        if node.tactic is not None:
            line += f" [{describe_tactic(node.tactic)}]"
        if node.state.path:
            line += f" (path: {node.state.path})"
        line += f" - {node.note}"
        lines.append(line)
        for child in node.children:
            self._visualize_node(child, depth + 1, lines)

    def to_graph(self) -> nx.DiGraph:
        """Export the forest as a directed graph with parent -> child edges."""
        graph = nx.DiGraph()
        for node in self.nodes.values():
            graph.add_node(
                node.id,
                path=node.state.path,
                status=node.status.value,
                statement=str(node.state.statement),
                tactic=describe_tactic(node.tactic) if node.tactic is not None else None,
                note=node.note,
            )
        for node in self.nodes.values():
            if node.parent is not None:
                graph.add_edge(node.parent, node.id)
        return graph
