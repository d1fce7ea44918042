"""Statement terms and the navigator that addresses their subterms."""

from .logic import (
    Term, Expression, Relation,
    Variable, Number, Operation, ViewAs, RelationExpression,
    Equal, Predicate, Not, And, Or, Implies, Equivalent,
    var, num, op, eq, pred
)
from .navigation import (
    Position, locate, subterm_at, replace, replace_all, find_all, iter_subterms
)
from .serialization import (
    CoreJSONEncoder, decode_core_object,
    term_to_json, term_from_json, save_term, load_term
)

__all__ = [
    # Terms
    'Term', 'Expression', 'Relation',
    'Variable', 'Number', 'Operation', 'ViewAs', 'RelationExpression',
    'Equal', 'Predicate', 'Not', 'And', 'Or', 'Implies', 'Equivalent',
    'var', 'num', 'op', 'eq', 'pred',
    # Navigation
    'Position', 'locate', 'subterm_at', 'replace', 'replace_all',
    'find_all', 'iter_subterms',
    # Serialization
    'CoreJSONEncoder', 'decode_core_object',
    'term_to_json', 'term_from_json', 'save_term', 'load_term'
]
