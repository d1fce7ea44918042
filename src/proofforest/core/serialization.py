"""JSON serialization for statement terms."""

import json
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, Union

from .logic import (
    Variable, Number, Operation, ViewAs, RelationExpression,
    Equal, Predicate, Not, And, Or, Implies, Equivalent, Term
)


class CoreJSONEncoder(json.JSONEncoder):
    """JSON encoder for statement terms."""

    def default(self, obj):
        # Expressions
        if isinstance(obj, Variable):
            return {"_type": "Variable", "name": obj.name}

        elif isinstance(obj, Number):
            if isinstance(obj.value, Fraction):
                return {"_type": "Number", "value": str(obj.value), "fraction": True}
            return {"_type": "Number", "value": obj.value}

        elif isinstance(obj, Operation):
            return {
                "_type": "Operation",
                "operator": obj.operator,
                "operands": list(obj.operands)
            }

        elif isinstance(obj, ViewAs):
            return {
                "_type": "ViewAs",
                "expression": obj.expression,
                "view": obj.view
            }

        elif isinstance(obj, RelationExpression):
            return {"_type": "RelationExpression", "relation": obj.relation}

        # Relations
        elif isinstance(obj, Equal):
            return {"_type": "Equal", "left": obj.left, "right": obj.right}

        elif isinstance(obj, Predicate):
            return {"_type": "Predicate", "name": obj.name, "args": list(obj.args)}

        elif isinstance(obj, Not):
            return {"_type": "Not", "operand": obj.operand}

        elif isinstance(obj, And):
            return {"_type": "And", "operands": list(obj.operands)}

        elif isinstance(obj, Or):
            return {"_type": "Or", "operands": list(obj.operands)}

        elif isinstance(obj, Implies):
            return {
                "_type": "Implies",
                "antecedent": obj.antecedent,
                "consequent": obj.consequent
            }

        elif isinstance(obj, Equivalent):
            return {"_type": "Equivalent", "left": obj.left, "right": obj.right}

        return super().default(obj)


def decode_core_object(dct: Dict[str, Any]) -> Any:
    """Decode a JSON dictionary back to a term; other dictionaries pass through."""
    if "_type" not in dct:
        return dct

    obj_type = dct["_type"]

    if obj_type == "Variable":
        return Variable(dct["name"])

    elif obj_type == "Number":
        if dct.get("fraction"):
            return Number(Fraction(dct["value"]))
        return Number(dct["value"])

    elif obj_type == "Operation":
        return Operation(dct["operator"], tuple(dct["operands"]))

    elif obj_type == "ViewAs":
        return ViewAs(dct["expression"], dct["view"])

    elif obj_type == "RelationExpression":
        return RelationExpression(dct["relation"])

    elif obj_type == "Equal":
        return Equal(dct["left"], dct["right"])

    elif obj_type == "Predicate":
        return Predicate(dct["name"], tuple(dct["args"]))

    elif obj_type == "Not":
        return Not(dct["operand"])

    elif obj_type == "And":
        return And(tuple(dct["operands"]))

    elif obj_type == "Or":
        return Or(tuple(dct["operands"]))

    elif obj_type == "Implies":
        return Implies(dct["antecedent"], dct["consequent"])

    elif obj_type == "Equivalent":
        return Equivalent(dct["left"], dct["right"])

    return dct


# Convenience functions

def term_to_json(term: Term, indent: int = 2) -> str:
    """Convert a term to a JSON string."""
    return json.dumps(term, cls=CoreJSONEncoder, indent=indent)


def term_from_json(json_str: str) -> Term:
    """Create a term from a JSON string."""
    return json.loads(json_str, object_hook=decode_core_object)


def save_term(term: Term, file_path: Union[str, Path]) -> None:
    """Save a term to a JSON file."""
    file_path = Path(file_path)
    with open(file_path, 'w') as f:
        json.dump(term, f, cls=CoreJSONEncoder, indent=2)


def load_term(file_path: Union[str, Path]) -> Term:
    """Load a term from a JSON file."""
    file_path = Path(file_path)
    with open(file_path, 'r') as f:
        return json.load(f, object_hook=decode_core_object)
