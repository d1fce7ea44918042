"""Proof state representation."""

from dataclasses import dataclass, replace
from enum import Enum
from fractions import Fraction
from typing import Callable, Optional, Tuple

from proofforest.core.logic import (
    Expression, Number, Operation, Relation, RelationExpression, Variable, ViewAs
)


class ObjectKind(Enum):
    """Coarse classification of a value bound in a proof state."""
    ELEMENT = "element"
    INTEGER = "integer"
    RATIONAL = "rational"
    REAL = "real"
    OPERATION = "operation"
    PROPOSITION = "proposition"
    GROUP_ELEMENT = "group_element"
    RING_ELEMENT = "ring_element"
    FIELD_ELEMENT = "field_element"
    GROUP = "group"
    RING = "ring"
    TOPOLOGICAL_SPACE = "topological_space"
    FUNCTION = "function"
    POINT = "point"
    LINEAR_TRANSFORMATION = "linear_transformation"
    CUSTOM = "custom"


class Quantification(Enum):
    UNIVERSAL = "universal"
    EXISTENTIAL = "existential"
    UNIQUE_EXISTENTIAL = "unique_existential"
    DEFINED = "defined"
    FIXED = "fixed"


# View names understood when classifying an introduced value
VIEW_KINDS = {
    "group_element": ObjectKind.GROUP_ELEMENT,
    "ring_element": ObjectKind.RING_ELEMENT,
    "field_element": ObjectKind.FIELD_ELEMENT,
    "group": ObjectKind.GROUP,
    "cyclic_group": ObjectKind.GROUP,
    "ring": ObjectKind.RING,
    "topological_space": ObjectKind.TOPOLOGICAL_SPACE,
    "homomorphism": ObjectKind.FUNCTION,
    "function": ObjectKind.FUNCTION,
    "point": ObjectKind.POINT,
    "linear_transformation": ObjectKind.LINEAR_TRANSFORMATION,
}


def infer_kind(expression: Expression, view: Optional[str] = None) -> ObjectKind:
    """Classify an expression, preferring the interpretation view when given."""
    if view is not None:
        return VIEW_KINDS.get(view.lower(), ObjectKind.CUSTOM)
    if isinstance(expression, ViewAs):
        return infer_kind(expression.expression, expression.view)
    if isinstance(expression, Number):
        if isinstance(expression.value, Fraction):
            return ObjectKind.RATIONAL
        if isinstance(expression.value, float):
            return ObjectKind.REAL
        return ObjectKind.INTEGER
    if isinstance(expression, Variable):
        return ObjectKind.ELEMENT
    if isinstance(expression, Operation):
        return ObjectKind.OPERATION
    if isinstance(expression, RelationExpression):
        return ObjectKind.PROPOSITION
    return ObjectKind.CUSTOM


@dataclass(frozen=True)
class ValueBinding:
    """A named value introduced into the proof environment."""
    name: str
    value: Expression
    kind: ObjectKind
    view: Optional[str] = None


@dataclass(frozen=True)
class QuantifiedObject:
    """An object bound by a quantifier of the statement."""
    variable: str
    kind: ObjectKind
    quantification: Quantification = Quantification.UNIVERSAL
    description: Optional[str] = None


@dataclass(frozen=True)
class ProofState:
    """Immutable snapshot of a proof: environment, statement and provenance.

    Every tactic produces a new ProofState; stored states are never
    modified in place.
    """
    statement: Relation
    quantifiers: Tuple[QuantifiedObject, ...] = ()
    bindings: Tuple[ValueBinding, ...] = ()
    path: Optional[str] = None
    justification: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.statement, Relation):
            raise TypeError(f"ProofState expects a Relation statement, got {self.statement!r}")
        object.__setattr__(self, 'quantifiers', tuple(self.quantifiers))
        object.__setattr__(self, 'bindings', tuple(self.bindings))

    def with_binding(self, binding: ValueBinding) -> 'ProofState':
        return replace(self, bindings=self.bindings + (binding,))

    def with_quantified(self, obj: QuantifiedObject) -> 'ProofState':
        return replace(self, quantifiers=self.quantifiers + (obj,))

    def with_statement(self, statement: Relation) -> 'ProofState':
        return replace(self, statement=statement)

    def with_path(self, path: Optional[str]) -> 'ProofState':
        return replace(self, path=path)

    def with_justification(self, justification: Optional[str]) -> 'ProofState':
        return replace(self, justification=justification)

    def transform(self, transform_fn: Callable[[Relation], Relation],
                  path: str, justification: str) -> 'ProofState':
        """Apply a statement transformation, recording a new path and justification."""
        return replace(self, statement=transform_fn(self.statement),
                       path=path, justification=justification)

    def lookup(self, name: str) -> Optional[ValueBinding]:
        """Most recent binding for ``name``, if any."""
        for binding in reversed(self.bindings):
            if binding.name == name:
                return binding
        return None

    def format(self) -> str:
        path = self.path or "no path"
        justification = self.justification or "no justification"
        return f"[{path}] {justification} - {self.statement}"

    def __str__(self):
        return self.format()


@dataclass(frozen=True)
class Theorem:
    """A named statement together with the proof state it starts from."""
    id: str
    name: str
    description: str
    initial_proof_state: ProofState

    @property
    def statement(self) -> Relation:
        return self.initial_proof_state.statement
