"""Building theorems by exploring a proof forest."""

import logging
from typing import List, Optional, Sequence

from proofforest.core.logic import Relation
from proofforest.exceptions import EmptyForestError, UnknownBookmarkError, UnknownNodeError
from proofforest.utils.config import get_config
from .branch import ProofBranch
from .forest import ProofForest, ProofNode
from .registry import TheoremRegistry
from .state import ProofState, QuantifiedObject, Theorem


logger = logging.getLogger(__name__)


def theorem_id(name: str) -> str:
    return "thm_" + name.lower().replace(' ', '_')


class TheoremBuilder:
    """Owns the proof forest for one theorem and hands out branches into it.

    Example:
        builder = TheoremBuilder("Add zero", eq(var("x") + 0, var("x")))
        builder.initial_branch().simplify(var("x") + 0).mark_complete()
        theorem = builder.build()
    """

    def __init__(self,
                 name: str,
                 statement: Relation,
                 assumptions: Sequence[QuantifiedObject] = (),
                 registry: Optional[TheoremRegistry] = None):
        self.name = name
        self.registry = registry
        self.forest = ProofForest()

        self.initial_path = get_config().get('proof.initial_path', 'p0')
        self.initial_state = ProofState(statement, quantifiers=tuple(assumptions),
                                        path=self.initial_path)
        self.forest.add_node(None, self.initial_state,
                             note=f"Initial state for theorem: {name}")

    @property
    def statement(self) -> Relation:
        return self.initial_state.statement

    def initial_branch(self) -> ProofBranch:
        """Branch at the root of the forest.

        Raises:
            EmptyForestError: If the forest has no root
        """
        if not self.forest.roots:
            raise EmptyForestError(f"Proof forest for '{self.name}' has no root")
        return ProofBranch(self.forest.roots[0], self.forest, self.initial_path, self.registry)

    def branch_at(self, node_id: int) -> ProofBranch:
        if node_id not in self.forest:
            raise UnknownNodeError(node_id)
        return ProofBranch(node_id, self.forest, f"p{node_id}", self.registry)

    def branch_at_bookmark(self, name: str) -> ProofBranch:
        node_id = self.forest.get_bookmark(name)
        if node_id is None:
            raise UnknownBookmarkError(name)
        return self.branch_at(node_id)

    def completed_nodes(self) -> List[ProofNode]:
        return self.forest.completed_nodes()

    def completed_paths(self) -> List[List[int]]:
        """Root-to-node id paths for every COMPLETE node."""
        return [self.forest.get_path(node.id) for node in self.forest.completed_nodes()]

    def is_fully_proven(self) -> bool:
        return self.forest.is_fully_proven()

    def build(self) -> Theorem:
        """Package the statement as a Theorem.

        The derivation stays in the forest; use ``completed_paths`` to
        find the branches that witness it.
        """
        theorem = Theorem(
            id=theorem_id(self.name),
            name=self.name,
            description=f"Theorem: {self.name}",
            initial_proof_state=self.initial_state,
        )
        logger.info("Built theorem %s with %d proof nodes (%d complete)",
                    theorem.id, len(self.forest), len(self.forest.completed_nodes()))
        return theorem
