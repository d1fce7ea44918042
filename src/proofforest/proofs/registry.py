"""Registry of theorems that tactics can apply during a proof."""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from proofforest.core.logic import Expression, Relation
from proofforest.core.navigation import locate
from .state import Theorem


logger = logging.getLogger(__name__)

# (statement, instantiation, target) -> new statement, or None if it does not apply
TheoremRewriter = Callable[[Relation, Mapping[str, Expression], Optional[Expression]], Optional[Relation]]


class TheoremRegistry:
    """Registry mapping theorem ids to theorems and their rewriters.

    How a theorem transforms a statement is supplied by whoever registers
    it. A theorem registered without a rewriter is accepted wherever it is
    applicable and leaves the statement as it is.
    """

    def __init__(self):
        self._theorems: Dict[str, Theorem] = {}
        self._rewriters: Dict[str, TheoremRewriter] = {}

    def register(self, theorem: Theorem, rewriter: Optional[TheoremRewriter] = None):
        """Register a theorem, replacing any earlier one with the same id."""
        logger.debug("Registering theorem %s (%s)", theorem.id, theorem.name)
        self._theorems[theorem.id] = theorem
        if rewriter is not None:
            self._rewriters[theorem.id] = rewriter
        else:
            self._rewriters.pop(theorem.id, None)

    def get_theorem(self, theorem_id: str) -> Optional[Theorem]:
        return self._theorems.get(theorem_id)

    def list_theorems(self) -> List[str]:
        """List registered theorem ids."""
        return list(self._theorems.keys())

    def clear(self):
        self._theorems.clear()
        self._rewriters.clear()

    def __contains__(self, theorem_id: str) -> bool:
        return theorem_id in self._theorems

    def __len__(self) -> int:
        return len(self._theorems)

    def apply_theorem(self,
                      theorem_id: str,
                      statement: Relation,
                      instantiation: Mapping[str, Expression],
                      target: Optional[Expression] = None) -> Optional[Relation]:
        """
        Apply a registered theorem to a statement.

        Args:
            theorem_id: Id of the theorem to apply
            statement: Statement to transform
            instantiation: Values for the theorem's variables
            target: Subexpression the application is anchored at, if any

        Returns:
            The transformed statement, or None if the theorem is unknown,
            the target does not occur in the statement, or the theorem's
            rewriter declines. Never raises for a non-match.
        """
        if theorem_id not in self._theorems:
            logger.debug("Theorem %s is not registered", theorem_id)
            return None

        if target is not None and locate(statement, target) is None:
            logger.debug("Target %s of theorem %s not found in %s", target, theorem_id, statement)
            return None

        rewriter = self._rewriters.get(theorem_id)
        if rewriter is None:
            return statement
        return rewriter(statement, instantiation, target)


_registry = TheoremRegistry()


def get_theorem_registry() -> TheoremRegistry:
    """Get the global theorem registry."""
    return _registry
