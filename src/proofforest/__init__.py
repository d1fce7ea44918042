"""
ProofForest: branching exploration of mathematical proofs.

ProofForest records every step of a proof attempt in an append-only forest
of immutable proof states, so alternative lines of reasoning can be explored
side by side. It includes:

- Statement terms with position-addressed navigation and rewriting
- A closed set of tactics (introduce, substitute, rewrite, apply theorem, ...)
- Proof branches, case analysis and bookmarks over a shared forest
- A theorem builder and a registry of applicable theorems
- JSON persistence and a plain text statement syntax

Basic usage:
    >>> from proofforest import *
    >>> builder = TheoremBuilder("Add zero", parse_statement("x + 0 = x"))
    >>> p = builder.initial_branch()
    >>> p1 = p.rewrite(parse_expression("x + 0"), parse_statement("x + 0 = x"))
    >>> p1.mark_complete().path
    'p0_1'
    >>> theorem = builder.build()
    >>> theorem.id
    'thm_add_zero'
"""

__version__ = "0.1.0"

from typing import Optional, Sequence, Union

# Terms
from proofforest.core import (
    Term, Expression, Relation,
    Variable, Number, Operation, ViewAs, RelationExpression,
    Equal, Predicate, Not, And, Or, Implies, Equivalent,
    var, num, op, eq, pred,
    locate, replace, subterm_at, find_all
)

# Proofs
from proofforest.proofs import (
    ProofState, ValueBinding, QuantifiedObject, ObjectKind, Quantification,
    Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
    Simplify, Decompose, Induction, Custom,
    RewriteDirection, DecompositionMethod, InductionType,
    apply_tactic, describe_tactic,
    ProofStatus, ProofNode, ProofForest, ProofBranch,
    CaseAnalysisBuilder, CaseResult,
    Theorem, TheoremBuilder, TheoremRegistry, get_theorem_registry,
    save_forest, load_forest
)

# Errors
from proofforest.exceptions import (
    ProofEngineError, UnknownNodeError, EmptyForestError,
    UnknownBookmarkError, InvalidPositionError
)

# Statement syntax
from proofforest.fileformats import (
    parse_statement, parse_expression, format_term, get_format_handler
)

# Configuration
from proofforest.utils import get_config, setup_logging


def start_proof(name: str,
                statement: Union[str, Relation],
                assumptions: Sequence[QuantifiedObject] = (),
                registry: Optional[TheoremRegistry] = None) -> TheoremBuilder:
    """
    Start exploring a proof of a statement.

    Args:
        name: Name of the theorem
        statement: The statement, either as a relation or in text syntax
        assumptions: Quantified objects the statement ranges over
        registry: Theorems available to ApplyTheorem (default: global registry)

    Returns:
        A TheoremBuilder whose forest holds the initial state
    """
    if isinstance(statement, str):
        statement = parse_statement(statement)
    return TheoremBuilder(name, statement, assumptions, registry)


__all__ = [
    # Version
    "__version__",

    # Terms
    "Term", "Expression", "Relation",
    "Variable", "Number", "Operation", "ViewAs", "RelationExpression",
    "Equal", "Predicate", "Not", "And", "Or", "Implies", "Equivalent",
    "var", "num", "op", "eq", "pred",
    "locate", "replace", "subterm_at", "find_all",

    # Proofs
    "ProofState", "ValueBinding", "QuantifiedObject", "ObjectKind", "Quantification",
    "Introduce", "Substitute", "ApplyTheorem", "CaseAnalysis", "Rewrite",
    "Simplify", "Decompose", "Induction", "Custom",
    "RewriteDirection", "DecompositionMethod", "InductionType",
    "apply_tactic", "describe_tactic",
    "ProofStatus", "ProofNode", "ProofForest", "ProofBranch",
    "CaseAnalysisBuilder", "CaseResult",
    "Theorem", "TheoremBuilder", "TheoremRegistry", "get_theorem_registry",
    "save_forest", "load_forest",

    # Errors
    "ProofEngineError", "UnknownNodeError", "EmptyForestError",
    "UnknownBookmarkError", "InvalidPositionError",

    # Statement syntax
    "parse_statement", "parse_expression", "format_term", "get_format_handler",

    # Configuration
    "get_config", "setup_logging",

    # High-level API
    "start_proof"
]
