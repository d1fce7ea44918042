"""
Proof exploration: states, tactics, the proof forest and theorem building.
"""

from .state import (
    ObjectKind, Quantification, ValueBinding, QuantifiedObject,
    ProofState, Theorem, infer_kind
)
from .registry import TheoremRegistry, get_theorem_registry
from .tactics import (
    Tactic, Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
    Simplify, Decompose, Induction, Custom,
    RewriteDirection, DecompositionMethod, InductionType,
    apply_tactic, describe_tactic
)
from .forest import ProofStatus, ProofNode, ProofForest
from .cases import CaseAnalysisBuilder, CaseResult
from .branch import ProofBranch, next_path_label
from .theorem import TheoremBuilder
from .serialization import (
    ProofJSONEncoder, ProofJSONDecoder,
    forest_to_json, forest_from_json,
    save_forest, load_forest,
    theorem_to_json, theorem_from_json
)

__all__ = [
    # State
    'ObjectKind', 'Quantification', 'ValueBinding', 'QuantifiedObject',
    'ProofState', 'Theorem', 'infer_kind',
    # Registry
    'TheoremRegistry', 'get_theorem_registry',
    # Tactics
    'Tactic', 'Introduce', 'Substitute', 'ApplyTheorem', 'CaseAnalysis', 'Rewrite',
    'Simplify', 'Decompose', 'Induction', 'Custom',
    'RewriteDirection', 'DecompositionMethod', 'InductionType',
    'apply_tactic', 'describe_tactic',
    # Forest and branches
    'ProofStatus', 'ProofNode', 'ProofForest',
    'CaseAnalysisBuilder', 'CaseResult',
    'ProofBranch', 'next_path_label',
    'TheoremBuilder',
    # Serialization
    'ProofJSONEncoder', 'ProofJSONDecoder',
    'forest_to_json', 'forest_from_json',
    'save_forest', 'load_forest',
    'theorem_to_json', 'theorem_from_json'
]
