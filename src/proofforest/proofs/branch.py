"""Proof branches: lightweight cursors into a shared proof forest."""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from proofforest.core.logic import Expression, RelationExpression, Term, Variable
from .cases import CaseAnalysisBuilder, CaseResult, split_cases
from .forest import ProofForest, ProofNode, ProofStatus
from .registry import TheoremRegistry
from .state import ProofState
from .tactics import (
    Tactic, Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
    Simplify, Decompose, Induction, Custom,
    RewriteDirection, DecompositionMethod, InductionType,
    apply_tactic
)


def next_path_label(path: str) -> str:
    """Label of the next step along a branch.

    A trailing numeric segment is incremented, otherwise ``_1`` is appended:
    ``p0 -> p0_1 -> p0_2``.
    """
    head, sep, last = path.rpartition('_')
    if sep and last.isdigit():
        return f"{head}_{int(last) + 1}"
    return f"{path}_1"


@dataclass(frozen=True)
class ProofBranch:
    """A position in the proof forest together with its path label.

    Branches are cheap values; any number of them may point into the same
    forest. Applying a tactic never changes a branch, it returns a new one
    at the freshly created node.
    """
    node_id: int
    forest: ProofForest = field(compare=False, repr=False)
    path: str = "p0"
    registry: Optional[TheoremRegistry] = field(default=None, compare=False, repr=False)

    def derive(self, node_id: int, path: str) -> 'ProofBranch':
        """A branch on the same forest at another node."""
        return ProofBranch(node_id, self.forest, path, self.registry)

    @property
    def node(self) -> ProofNode:
        return self.forest.get_node(self.node_id)

    @property
    def state(self) -> ProofState:
        return self.node.state

    @property
    def status(self) -> ProofStatus:
        return self.node.status

    def get_path_name(self) -> str:
        return self.path

    def apply_tactic(self, tactic: Tactic, note: str = "") -> 'ProofBranch':
        """
        Apply a tactic to this branch's state and record the result as a child.

        Args:
            tactic: The tactic to apply
            note: Annotation stored on the new node

        Returns:
            A branch at the new node, labelled ``next_path_label(self.path)``
        """
        new_path = next_path_label(self.path)
        new_state = apply_tactic(tactic, self.state, self.registry).with_path(new_path)
        child_id = self.forest.add_node(self.node_id, new_state, tactic, note, ProofStatus.IN_PROGRESS)
        return self.derive(child_id, new_path)

    def branch(self) -> 'ProofBranch':
        """An alternative line of reasoning from the same node."""
        return self.derive(self.node_id, f"{self.path}_{len(self.node.children)}")

    def branch_with_id(self, branch_id: int) -> 'ProofBranch':
        return self.derive(self.node_id, f"{self.path}_{branch_id}")

    # Status and bookmarks

    def mark_complete(self) -> 'ProofBranch':
        self.forest.mark_complete(self.node_id)
        return self

    def should_complete(self) -> 'ProofBranch':
        """Alias of mark_complete."""
        return self.mark_complete()

    def mark_wip(self) -> 'ProofBranch':
        self.forest.mark_wip(self.node_id)
        return self

    def mark_todo(self) -> 'ProofBranch':
        self.forest.mark_todo(self.node_id)
        return self

    def mark_abandoned(self) -> 'ProofBranch':
        self.forest.mark_abandoned(self.node_id)
        return self

    def mark_in_progress(self) -> 'ProofBranch':
        self.forest.mark_in_progress(self.node_id)
        return self

    def bookmark(self, name: str) -> 'ProofBranch':
        self.forest.add_bookmark(name, self.node_id)
        return self

    # Rendering

    def summary(self) -> str:
        """Transcript of the steps from the root down to this branch's node."""
        lines = ["Proof Branch Summary:"]
        for depth, node_id in enumerate(self.forest.get_path(self.node_id)):
            node = self.forest.get_node(node_id)
            line = f"{'  ' * depth}{node.status.symbol} Node {node_id}"
            if node.tactic is not None:
                line += f" [{node.tactic.describe()}]"
            line += f" - {node.note}"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def visualize_forest(self) -> str:
        return self.forest.visualize()

    # Tactic shortcuts

    def intro(self, name: str, expression: Optional[Expression] = None,
              view: Optional[str] = None, sequence: int = 0) -> 'ProofBranch':
        if expression is None:
            expression = Variable(name)
        return self.apply_tactic(Introduce(name, expression, view, sequence),
                                 f"Introduce variable '{name}'")

    def substitute(self, pattern: Term, replacement: Term,
                   position: Optional[Sequence[int]] = None) -> 'ProofBranch':
        return self.apply_tactic(Substitute(pattern, replacement, position),
                                 f"Substitute {pattern} with {replacement}")

    def apply_theorem(self, theorem_id: str,
                      instantiation: Optional[Mapping[str, Expression]] = None,
                      target: Optional[Expression] = None) -> 'ProofBranch':
        return self.apply_tactic(ApplyTheorem(theorem_id, instantiation or {}, target),
                                 f"Apply theorem '{theorem_id}'")

    def rewrite(self, target: Term, equation: Term,
                direction: RewriteDirection = RewriteDirection.FORWARD,
                position: Optional[Sequence[int]] = None) -> 'ProofBranch':
        return self.apply_tactic(Rewrite(target, equation, direction, position),
                                 f"Rewrite {target} using {equation}")

    def simplify(self, target: Expression, hints: Sequence[str] = ()) -> 'ProofBranch':
        return self.apply_tactic(Simplify(target, tuple(hints)), f"Simplify {target}")

    def decompose(self, target: Expression,
                  method: DecompositionMethod = DecompositionMethod.COMPONENTS,
                  method_name: Optional[str] = None) -> 'ProofBranch':
        return self.apply_tactic(Decompose(target, method, method_name), f"Decompose {target}")

    def induction(self, variable: str,
                  induction_type: InductionType = InductionType.NATURAL,
                  type_name: Optional[str] = None,
                  schema: Optional[Expression] = None) -> 'ProofBranch':
        return self.apply_tactic(Induction(variable, induction_type, type_name, schema),
                                 f"Induction on {variable}")

    def custom(self, name: str, *args: str) -> 'ProofBranch':
        return self.apply_tactic(Custom(name, args), f"Custom tactic '{name}'")

    def case_analysis_tactic(self, target: Expression, case_names: Sequence[str],
                             case_exprs: Optional[Sequence[Expression]] = None) -> 'ProofBranch':
        """Record a case split as a single step, without creating case nodes."""
        if case_exprs is None:
            case_exprs = [Variable(name) for name in case_names]
        return self.apply_tactic(CaseAnalysis(target, case_exprs, case_names),
                                 f"Case analysis on {target}")

    # Case analysis

    def cases(self, case_names: Sequence[str],
              target: Optional[Expression] = None) -> CaseResult:
        """Split into one case per name, all at once.

        Args:
            case_names: Descriptions of the cases, in order
            target: What is being split on. Defaults to the current statement.

        Returns:
            A CaseResult whose parent branch is the case-split node
        """
        if target is None:
            target = RelationExpression(self.state.statement)
        expressions = [Variable(name) for name in case_names]
        split_branch, case_branches = split_cases(self, target, case_names, expressions)
        return CaseResult(split_branch, case_branches, self.path)

    def case_analysis(self) -> CaseAnalysisBuilder:
        return CaseAnalysisBuilder(self)

    def __str__(self):
        return f"ProofBranch({self.path} @ node {self.node_id})"
