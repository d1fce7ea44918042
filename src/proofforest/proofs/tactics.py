"""Tactics: the closed set of proof state transformations.

Each tactic is an immutable value carrying exactly the data it needs to
apply itself and to describe itself. ``apply_tactic`` is pure: it returns
a new ProofState and never touches the one it was given.

Failures to find a pattern or to apply a theorem are soft. The statement
is left as it is and the justification of the returned state says what
went wrong, so exploration can carry on.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple, Union

from proofforest.core.logic import Equal, Expression, Relation, RelationExpression, Term, Variable, ViewAs
from proofforest.core.navigation import locate, replace
from .registry import TheoremRegistry, get_theorem_registry
from .state import ProofState, ValueBinding, infer_kind


logger = logging.getLogger(__name__)


class RewriteDirection(Enum):
    """Which side of an equation replaces the target."""
    FORWARD = "forward"     # a = b rewrites a into b
    BACKWARD = "backward"   # a = b rewrites b into a


class DecompositionMethod(Enum):
    COMPONENTS = "components"
    FACTOR = "factor"
    EXPAND = "expand"
    OTHER = "other"


class InductionType(Enum):
    NATURAL = "natural"
    STRUCTURAL = "structural"
    TRANSFINITE = "transfinite"
    WELL_FOUNDED = "well_founded"
    OTHER = "other"


def _position(position) -> Optional[Tuple[int, ...]]:
    return None if position is None else tuple(position)


class _TacticBase:
    """Shared entry points; all behaviour lives in apply_tactic and describe_tactic."""

    def apply(self, state: ProofState, registry: Optional[TheoremRegistry] = None) -> ProofState:
        return apply_tactic(self, state, registry)

    def describe(self) -> str:
        return describe_tactic(self)

    def __str__(self):
        return describe_tactic(self)


@dataclass(frozen=True)
class Introduce(_TacticBase):
    """Bind a named value, optionally read under an interpretation view."""
    name: str
    expression: Expression
    view: Optional[str] = None
    sequence: int = 0


@dataclass(frozen=True)
class Substitute(_TacticBase):
    """Replace the first occurrence of ``pattern`` (or the subterm at ``position``)."""
    pattern: Term
    replacement: Term
    position: Optional[Tuple[int, ...]] = None
    sequence: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'position', _position(self.position))


@dataclass(frozen=True)
class ApplyTheorem(_TacticBase):
    """Apply a theorem from the registry, optionally anchored at a target."""
    theorem_id: str
    instantiation: Tuple[Tuple[str, Expression], ...] = ()
    target: Optional[Expression] = None
    sequence: int = 0

    def __post_init__(self):
        items = self.instantiation
        if isinstance(items, Mapping):
            items = items.items()
        object.__setattr__(self, 'instantiation', tuple(sorted(items, key=lambda kv: kv[0])))

    @property
    def mapping(self) -> Dict[str, Expression]:
        return dict(self.instantiation)


@dataclass(frozen=True)
class CaseAnalysis(_TacticBase):
    """Metadata for a case split; the branches themselves are separate nodes."""
    target: Expression
    case_exprs: Tuple[Expression, ...] = ()
    case_names: Tuple[str, ...] = ()
    sequence: int = 0

    def __post_init__(self):
        if isinstance(self.target, str):
            object.__setattr__(self, 'target', Variable(self.target))
        object.__setattr__(self, 'case_exprs', tuple(self.case_exprs))
        object.__setattr__(self, 'case_names', tuple(self.case_names))


@dataclass(frozen=True)
class Rewrite(_TacticBase):
    """Rewrite ``target`` with one side of an equation."""
    target: Term
    equation: Term
    direction: RewriteDirection = RewriteDirection.FORWARD
    position: Optional[Tuple[int, ...]] = None
    sequence: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'position', _position(self.position))


@dataclass(frozen=True)
class Simplify(_TacticBase):
    target: Expression
    hints: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'hints', tuple(self.hints))


@dataclass(frozen=True)
class Decompose(_TacticBase):
    target: Expression
    method: DecompositionMethod = DecompositionMethod.COMPONENTS
    method_name: Optional[str] = None


@dataclass(frozen=True)
class Induction(_TacticBase):
    variable: str
    induction_type: InductionType = InductionType.NATURAL
    type_name: Optional[str] = None
    schema: Optional[Expression] = None


@dataclass(frozen=True)
class Custom(_TacticBase):
    name: str
    args: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'args', tuple(self.args))


Tactic = Union[Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
               Simplify, Decompose, Induction, Custom]

TACTIC_TYPES = (Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
                Simplify, Decompose, Induction, Custom)


def apply_tactic(tactic: Tactic, state: ProofState,
                 registry: Optional[TheoremRegistry] = None) -> ProofState:
    """
    Apply a tactic to a proof state, yielding a new state.

    Args:
        tactic: The tactic to apply
        state: The state to transform; it is not modified
        registry: Theorem registry used by ApplyTheorem. Defaults to the
            global registry.

    Returns:
        The new proof state. Soft failures return a state whose statement
        is unchanged and whose justification describes the failure.

    Raises:
        TypeError: If ``tactic`` is not one of the tactic variants
    """
    if isinstance(tactic, Introduce):
        value = tactic.expression
        if tactic.view is not None:
            value = ViewAs(tactic.expression, tactic.view)
        kind = infer_kind(tactic.expression, tactic.view)
        binding = ValueBinding(tactic.name, value, kind, tactic.view)
        return state.with_binding(binding).with_justification(
            f"Introduced '{tactic.name}' as {kind.value}")

    elif isinstance(tactic, Substitute):
        found = locate(state.statement, tactic.pattern, tactic.position)
        if found is None:
            logger.debug("Substitution pattern %s not found in %s", tactic.pattern, state.statement)
            return state.with_justification(f"Substitution pattern not found: {tactic.pattern}")
        _, path = found
        statement = replace(state.statement, path, tactic.replacement)
        return state.with_statement(statement).with_justification(
            f"Substituted {tactic.pattern} with {tactic.replacement}")

    elif isinstance(tactic, ApplyTheorem):
        registry = registry if registry is not None else get_theorem_registry()
        result = registry.apply_theorem(tactic.theorem_id, state.statement,
                                        tactic.mapping, tactic.target)
        if result is None:
            logger.debug("Theorem %s did not apply to %s", tactic.theorem_id, state.statement)
            message = f"Could not apply theorem '{tactic.theorem_id}'"
            if tactic.target is not None:
                message += f" to {tactic.target}"
            return state.with_justification(message)
        return state.with_statement(result).with_justification(
            f"Applied theorem '{tactic.theorem_id}' with {len(tactic.instantiation)} instantiations")

    elif isinstance(tactic, CaseAnalysis):
        return state.with_justification(
            f"Case analysis on {tactic.target} with {len(tactic.case_names)} cases: "
            f"{', '.join(tactic.case_names)}")

    elif isinstance(tactic, Rewrite):
        found = locate(state.statement, tactic.target, tactic.position)
        if found is None:
            logger.debug("Rewrite target %s not found in %s", tactic.target, state.statement)
            return state.with_justification(f"Rewrite target not found: {tactic.target}")
        subterm, path = found
        replacement = fit_slot(subterm, rewrite_replacement(tactic.equation, tactic.direction))
        try:
            rewritten = state.with_statement(replace(state.statement, path, replacement))
        except TypeError:
            logger.debug("Rewrite of %s with %s does not fit %s", tactic.target, replacement, state.statement)
            return state.with_justification(
                f"Rewrite replacement {replacement} does not fit in place of {tactic.target}")
        return rewritten.with_justification(
            f"Rewrote {tactic.target} using {tactic.equation} ({_direction_text(tactic.direction)})")

    # Simplify, Decompose, Induction and Custom only record what was done
    elif isinstance(tactic, Simplify):
        return state.with_justification(describe_tactic(tactic))

    elif isinstance(tactic, Decompose):
        return state.with_justification(describe_tactic(tactic))

    elif isinstance(tactic, Induction):
        return state.with_justification(describe_tactic(tactic))

    elif isinstance(tactic, Custom):
        return state.with_justification(describe_tactic(tactic))

    raise TypeError(f"Not a tactic: {tactic!r}")


def rewrite_replacement(equation: Term, direction: RewriteDirection) -> Term:
    """The side of ``equation`` that replaces the rewrite target.

    Equations that are not equalities are substituted whole.
    """
    relation = equation.relation if isinstance(equation, RelationExpression) else equation
    if isinstance(relation, Equal):
        if direction == RewriteDirection.FORWARD:
            return relation.right
        return relation.left
    return equation


def fit_slot(slot: Term, replacement: Term) -> Term:
    """Wrap or unwrap ``replacement`` so it can stand where ``slot`` stands."""
    if isinstance(slot, Expression) and isinstance(replacement, Relation):
        return RelationExpression(replacement)
    if isinstance(slot, Relation) and isinstance(replacement, RelationExpression):
        return replacement.relation
    return replacement


def _direction_text(direction: RewriteDirection) -> str:
    return "left to right" if direction == RewriteDirection.FORWARD else "right to left"


def _method_text(tactic: Decompose) -> str:
    if tactic.method == DecompositionMethod.OTHER:
        return tactic.method_name or "other"
    return {
        DecompositionMethod.COMPONENTS: "components",
        DecompositionMethod.FACTOR: "factoring",
        DecompositionMethod.EXPAND: "expansion",
    }[tactic.method]


def _induction_text(tactic: Induction) -> str:
    if tactic.induction_type == InductionType.OTHER:
        return tactic.type_name or "other"
    return {
        InductionType.NATURAL: "mathematical",
        InductionType.STRUCTURAL: "structural",
        InductionType.TRANSFINITE: "transfinite",
        InductionType.WELL_FOUNDED: "well-founded",
    }[tactic.induction_type]


def describe_tactic(tactic: Tactic) -> str:
    """Short display string for a tactic. For rendering only."""
    if isinstance(tactic, Introduce):
        text = f"Introduce '{tactic.name}' as {tactic.expression}"
        if tactic.view is not None:
            text += f" viewed as {tactic.view}"
        return text

    elif isinstance(tactic, Substitute):
        text = f"Substitute {tactic.pattern} with {tactic.replacement}"
        if tactic.position is not None:
            text += f" at {list(tactic.position)}"
        return text

    elif isinstance(tactic, ApplyTheorem):
        text = f"Apply theorem '{tactic.theorem_id}'"
        if tactic.target is not None:
            text += f" to {tactic.target}"
        if tactic.instantiation:
            text += " with " + ", ".join(f"{k} := {v}" for k, v in tactic.instantiation)
        return text

    elif isinstance(tactic, CaseAnalysis):
        return (f"Case analysis on {tactic.target} with {len(tactic.case_names)} cases: "
                f"{', '.join(tactic.case_names)}")

    elif isinstance(tactic, Rewrite):
        text = f"Rewrite {tactic.target} using {tactic.equation} ({_direction_text(tactic.direction)})"
        if tactic.position is not None:
            text += f" at {list(tactic.position)}"
        return text

    elif isinstance(tactic, Simplify):
        text = f"Simplified {tactic.target}"
        if tactic.hints:
            text += f" with hints: {', '.join(tactic.hints)}"
        return text

    elif isinstance(tactic, Decompose):
        return f"Decomposed {tactic.target} by {_method_text(tactic)}"

    elif isinstance(tactic, Induction):
        text = f"Applied {_induction_text(tactic)} induction on {tactic.variable}"
        if tactic.schema is not None:
            text += f" with schema {tactic.schema}"
        return text

    elif isinstance(tactic, Custom):
        text = f"Applied custom tactic '{tactic.name}'"
        if tactic.args:
            text += f" with arguments: {', '.join(tactic.args)}"
        return text

    raise TypeError(f"Not a tactic: {tactic!r}")
