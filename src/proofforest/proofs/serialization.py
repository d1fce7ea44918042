"""JSON serialization for proof states, tactics, forests and theorems."""

import json
from pathlib import Path
from typing import Optional, Union

from proofforest.core.serialization import CoreJSONEncoder, decode_core_object
from proofforest.utils.config import get_config
from .forest import ProofForest, ProofNode, ProofStatus
from .state import (
    ObjectKind, ProofState, Quantification, QuantifiedObject, Theorem, ValueBinding
)
from .tactics import (
    Introduce, Substitute, ApplyTheorem, CaseAnalysis, Rewrite,
    Simplify, Decompose, Induction, Custom,
    RewriteDirection, DecompositionMethod, InductionType
)


def _position(position):
    return None if position is None else list(position)


class ProofJSONEncoder(CoreJSONEncoder):
    """JSON encoder for proof objects."""

    def default(self, obj):
        # State
        if isinstance(obj, ProofState):
            return {
                "_type": "ProofState",
                "statement": obj.statement,
                "quantifiers": list(obj.quantifiers),
                "bindings": list(obj.bindings),
                "path": obj.path,
                "justification": obj.justification
            }

        elif isinstance(obj, ValueBinding):
            return {
                "_type": "ValueBinding",
                "name": obj.name,
                "value": obj.value,
                "kind": obj.kind.value,
                "view": obj.view
            }

        elif isinstance(obj, QuantifiedObject):
            return {
                "_type": "QuantifiedObject",
                "variable": obj.variable,
                "kind": obj.kind.value,
                "quantification": obj.quantification.value,
                "description": obj.description
            }

        # Tactics
        elif isinstance(obj, Introduce):
            return {
                "_type": "Introduce",
                "name": obj.name,
                "expression": obj.expression,
                "view": obj.view,
                "sequence": obj.sequence
            }

        elif isinstance(obj, Substitute):
            return {
                "_type": "Substitute",
                "pattern": obj.pattern,
                "replacement": obj.replacement,
                "position": _position(obj.position),
                "sequence": obj.sequence
            }

        elif isinstance(obj, ApplyTheorem):
            return {
                "_type": "ApplyTheorem",
                "theorem_id": obj.theorem_id,
                "instantiation": [[name, value] for name, value in obj.instantiation],
                "target": obj.target,
                "sequence": obj.sequence
            }

        elif isinstance(obj, CaseAnalysis):
            return {
                "_type": "CaseAnalysis",
                "target": obj.target,
                "case_exprs": list(obj.case_exprs),
                "case_names": list(obj.case_names),
                "sequence": obj.sequence
            }

        elif isinstance(obj, Rewrite):
            return {
                "_type": "Rewrite",
                "target": obj.target,
                "equation": obj.equation,
                "direction": obj.direction.value,
                "position": _position(obj.position),
                "sequence": obj.sequence
            }

        elif isinstance(obj, Simplify):
            return {"_type": "Simplify", "target": obj.target, "hints": list(obj.hints)}

        elif isinstance(obj, Decompose):
            return {
                "_type": "Decompose",
                "target": obj.target,
                "method": obj.method.value,
                "method_name": obj.method_name
            }

        elif isinstance(obj, Induction):
            return {
                "_type": "Induction",
                "variable": obj.variable,
                "induction_type": obj.induction_type.value,
                "type_name": obj.type_name,
                "schema": obj.schema
            }

        elif isinstance(obj, Custom):
            return {"_type": "Custom", "name": obj.name, "args": list(obj.args)}

        # Forest
        elif isinstance(obj, ProofNode):
            return {
                "_type": "ProofNode",
                "id": obj.id,
                "parent": obj.parent,
                "children": list(obj.children),
                "state": obj.state,
                "tactic": obj.tactic,
                "note": obj.note,
                "status": obj.status.value,
                "created_at": obj.created_at
            }

        elif isinstance(obj, ProofForest):
            return {
                "_type": "ProofForest",
                "nodes": list(obj.nodes.values()),
                "roots": list(obj.roots),
                "bookmarks": dict(obj.bookmarks),
                "next_id": obj.next_id
            }

        elif isinstance(obj, Theorem):
            return {
                "_type": "Theorem",
                "id": obj.id,
                "name": obj.name,
                "description": obj.description,
                "initial_proof_state": obj.initial_proof_state
            }

        # Fall back to parent encoder
        return super().default(obj)


class ProofJSONDecoder(json.JSONDecoder):
    """JSON decoder for proof objects."""

    def __init__(self):
        super().__init__(object_hook=self.object_hook)

    def object_hook(self, obj):
        # First try core decoder
        result = decode_core_object(obj)
        if result is not obj:
            return result

        obj_type = obj.get("_type")

        if obj_type == "ProofState":
            return ProofState(
                statement=obj["statement"],
                quantifiers=tuple(obj.get("quantifiers", [])),
                bindings=tuple(obj.get("bindings", [])),
                path=obj.get("path"),
                justification=obj.get("justification")
            )

        elif obj_type == "ValueBinding":
            return ValueBinding(obj["name"], obj["value"], ObjectKind(obj["kind"]), obj.get("view"))

        elif obj_type == "QuantifiedObject":
            return QuantifiedObject(
                variable=obj["variable"],
                kind=ObjectKind(obj["kind"]),
                quantification=Quantification(obj.get("quantification", "universal")),
                description=obj.get("description")
            )

        elif obj_type == "Introduce":
            return Introduce(obj["name"], obj["expression"], obj.get("view"), obj.get("sequence", 0))

        elif obj_type == "Substitute":
            return Substitute(obj["pattern"], obj["replacement"],
                              obj.get("position"), obj.get("sequence", 0))

        elif obj_type == "ApplyTheorem":
            return ApplyTheorem(
                obj["theorem_id"],
                tuple((name, value) for name, value in obj.get("instantiation", [])),
                obj.get("target"),
                obj.get("sequence", 0)
            )

        elif obj_type == "CaseAnalysis":
            return CaseAnalysis(obj["target"], obj.get("case_exprs", []),
                                obj.get("case_names", []), obj.get("sequence", 0))

        elif obj_type == "Rewrite":
            return Rewrite(
                obj["target"],
                obj["equation"],
                RewriteDirection(obj.get("direction", "forward")),
                obj.get("position"),
                obj.get("sequence", 0)
            )

        elif obj_type == "Simplify":
            return Simplify(obj["target"], obj.get("hints", []))

        elif obj_type == "Decompose":
            return Decompose(obj["target"], DecompositionMethod(obj["method"]), obj.get("method_name"))

        elif obj_type == "Induction":
            return Induction(obj["variable"], InductionType(obj["induction_type"]),
                             obj.get("type_name"), obj.get("schema"))

        elif obj_type == "Custom":
            return Custom(obj["name"], obj.get("args", []))

        elif obj_type == "ProofNode":
            return ProofNode(
                id=obj["id"],
                parent=obj["parent"],
                state=obj["state"],
                tactic=obj.get("tactic"),
                note=obj.get("note", ""),
                status=ProofStatus(obj["status"]),
                children=list(obj.get("children", [])),
                created_at=obj["created_at"]
            )

        elif obj_type == "ProofForest":
            forest = ProofForest()
            for node in obj["nodes"]:
                forest.nodes[node.id] = node
            forest.roots = list(obj["roots"])
            forest.bookmarks = dict(obj.get("bookmarks", {}))
            forest.next_id = obj.get("next_id", max(forest.nodes, default=-1) + 1)
            return forest

        elif obj_type == "Theorem":
            return Theorem(obj["id"], obj["name"], obj["description"], obj["initial_proof_state"])

        return obj


def _indent(indent: Optional[int]) -> Optional[int]:
    if indent is None:
        return get_config().get('serialization.indent', 2)
    return indent


# Convenience functions
def forest_to_json(forest: ProofForest, indent: Optional[int] = None) -> str:
    """Convert a proof forest to JSON string."""
    return json.dumps(forest, cls=ProofJSONEncoder, indent=_indent(indent), ensure_ascii=False)


def forest_from_json(json_str: str) -> ProofForest:
    """Convert JSON string to a proof forest."""
    return json.loads(json_str, cls=ProofJSONDecoder)


def save_forest(forest: ProofForest, filepath: Union[str, Path]) -> None:
    """Save a proof forest to a JSON file."""
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(forest, f, cls=ProofJSONEncoder, indent=_indent(None), ensure_ascii=False)


def load_forest(filepath: Union[str, Path]) -> ProofForest:
    """Load a proof forest from a JSON file."""
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f, cls=ProofJSONDecoder)


def theorem_to_json(theorem: Theorem, indent: Optional[int] = None) -> str:
    """Convert a theorem to JSON string."""
    return json.dumps(theorem, cls=ProofJSONEncoder, indent=_indent(indent), ensure_ascii=False)


def theorem_from_json(json_str: str) -> Theorem:
    """Convert JSON string to a theorem."""
    return json.loads(json_str, cls=ProofJSONDecoder)
