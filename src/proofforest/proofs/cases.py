"""Case analysis: splitting a proof branch into named sub-cases.

A split always has the same shape in the forest::

    parent
    └── case-split node      (CaseAnalysis tactic, path "<parent>_cases")
        ├── case node 1      (Introduce marker, path "<parent>_c1")
        └── case node 2      (Introduce marker, path "<parent>_c2")

Every case node holds the parent's proof state. Whether the cases cover
every possibility is never checked; ``all_cases_complete`` only reports.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from proofforest.core.logic import Expression, RelationExpression, Variable
from .forest import ProofStatus
from .tactics import CaseAnalysis, Introduce, apply_tactic

if TYPE_CHECKING:
    from .branch import ProofBranch


logger = logging.getLogger(__name__)

# Receives the branch at a case node and returns the branch where that case ends
CaseContinuation = Callable[['ProofBranch'], Optional['ProofBranch']]


@dataclass
class CaseResult:
    """The outcome of a case split."""
    parent_branch: 'ProofBranch'
    cases: List['ProofBranch']
    parent_path: str

    def case(self, index: int) -> Optional['ProofBranch']:
        if 0 <= index < len(self.cases):
            return self.cases[index]
        return None

    def case_count(self) -> int:
        return len(self.cases)

    def complete_all_cases(self) -> 'CaseResult':
        """Mark every case branch COMPLETE."""
        for branch in self.cases:
            branch.mark_complete()
        return self

    def should_complete(self) -> 'ProofBranch':
        """Mark the case-split node COMPLETE and return its branch."""
        return self.parent_branch.mark_complete()

    def all_cases_complete(self) -> bool:
        return all(branch.status == ProofStatus.COMPLETE for branch in self.cases)


def split_cases(parent: 'ProofBranch',
                target: Expression,
                names: Sequence[str],
                expressions: Sequence[Expression],
                notes: Optional[Sequence[str]] = None) -> Tuple['ProofBranch', List['ProofBranch']]:
    """Create the case-split node and one case node per name under ``parent``.

    Returns:
        The branch at the case-split node and the branches at the case nodes,
        in declaration order
    """
    forest = parent.forest
    state = parent.state
    names = tuple(names)
    expressions = tuple(expressions)

    tactic = CaseAnalysis(target, expressions, names)
    split_path = f"{parent.path}_cases"
    split_state = apply_tactic(tactic, state, parent.registry).with_path(split_path)
    split_id = forest.add_node(parent.node_id, split_state, tactic,
                               f"Case analysis with {len(names)} cases", ProofStatus.IN_PROGRESS)

    branches = []
    for i, (name, expression) in enumerate(zip(names, expressions), 1):
        case_path = f"{parent.path}_c{i}"
        case_state = state.transform(lambda statement: statement, case_path, f"Case {i}: {name}")
        note = notes[i - 1] if notes is not None else name
        case_id = forest.add_node(split_id, case_state, Introduce(name, expression, sequence=i),
                                  note, ProofStatus.IN_PROGRESS)
        branches.append(parent.derive(case_id, case_path))

    logger.debug("Split node %d into %d cases on %s", parent.node_id, len(names), target)
    return parent.derive(split_id, split_path), branches


class CaseAnalysisBuilder:
    """Declares the cases of a split one at a time, each with its own continuation.

    Nothing is added to the forest until ``build()``. Then the split is
    created and each continuation runs on its case branch, in the order the
    cases were declared.

    Example:
        result = (branch.case_analysis()
                  .on_variable("n")
                  .case("n even", lambda b: b.intro("k", var("n") / 2).mark_complete())
                  .case("n odd", lambda b: b.mark_complete())
                  .build())
    """

    def __init__(self, parent_branch: 'ProofBranch'):
        self.parent_branch = parent_branch
        self.target: Optional[Expression] = None
        self._cases: List[Tuple[str, CaseContinuation, Optional[Expression]]] = []

    def on_expression(self, target: Expression) -> 'CaseAnalysisBuilder':
        self.target = target
        return self

    def on_variable(self, name: str) -> 'CaseAnalysisBuilder':
        self.target = Variable(name)
        return self

    def case(self,
             description: str,
             continuation: CaseContinuation,
             expression: Optional[Expression] = None) -> 'CaseAnalysisBuilder':
        """Declare a case; ``expression`` defaults to a variable named after it."""
        self._cases.append((description, continuation, expression))
        return self

    def build(self) -> CaseResult:
        parent = self.parent_branch
        target = self.target
        if target is None:
            target = RelationExpression(parent.state.statement)

        names = [description for description, _, _ in self._cases]
        expressions = [expression if expression is not None else Variable(description)
                       for description, _, expression in self._cases]
        if self.target is not None:
            notes = [f"Case: {self.target} where {name}" for name in names]
        else:
            notes = [f"Case: {name}" for name in names]

        split_branch, case_branches = split_cases(parent, target, names, expressions, notes)

        # Continuations run with no forest lock held
        finished = []
        for case_branch, (_, continuation, _) in zip(case_branches, self._cases):
            result = continuation(case_branch)
            finished.append(result if result is not None else case_branch)

        return CaseResult(split_branch, finished, parent.path)
