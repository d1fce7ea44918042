"""Position-addressed navigation and rewriting of statement terms."""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from proofforest.exceptions import InvalidPositionError
from .logic import Term


logger = logging.getLogger(__name__)

Position = Tuple[int, ...]


def subterm_at(term: Term, position: Sequence[int]) -> Optional[Term]:
    """Follow a position path from ``term`` and return the subterm it denotes.

    Returns None if any index on the path does not exist.
    """
    current = term
    for index in position:
        kids = current.children()
        if not isinstance(index, int) or not 0 <= index < len(kids):
            return None
        current = kids[index]
    return current


def iter_subterms(term: Term, prefix: Position = ()) -> Iterator[Tuple[Position, Term]]:
    """Yield ``(position, subterm)`` pairs in pre-order, left to right."""
    yield prefix, term
    for index, kid in enumerate(term.children()):
        yield from iter_subterms(kid, prefix + (index,))


def locate(statement: Term,
           pattern: Optional[Term] = None,
           position: Optional[Sequence[int]] = None) -> Optional[Tuple[Term, Position]]:
    """Find a subterm either by structural equality or by explicit position.

    Args:
        statement: The term to search in
        pattern: Subterm to look for; compared structurally
        position: Explicit path to the subterm. It is always re-derived
            against ``statement`` and, when a pattern is given as well,
            the derived subterm must equal it.

    Returns:
        ``(subterm, position)`` for the first match, or None
    """
    if pattern is None and position is None:
        raise ValueError("locate needs a pattern or a position")

    if position is not None:
        path = tuple(position)
        found = subterm_at(statement, path)
        if found is None:
            logger.debug("Position %s does not exist in %s", list(path), statement)
            return None
        if pattern is not None and found != pattern:
            logger.debug("Subterm %s at %s does not match %s", found, list(path), pattern)
            return None
        return found, path

    for path, subterm in iter_subterms(statement):
        if subterm == pattern:
            return subterm, path
    return None


def find_all(statement: Term, pattern: Term) -> List[Position]:
    """Positions of every occurrence of ``pattern`` in pre-order."""
    return [path for path, subterm in iter_subterms(statement) if subterm == pattern]


def replace(statement: Term, position: Sequence[int], replacement: Term) -> Term:
    """Return a copy of ``statement`` with the subterm at ``position`` replaced.

    Only the nodes along the path are rebuilt; every subtree off the path
    is shared with the original statement.

    Raises:
        InvalidPositionError: If the position does not exist in ``statement``
        TypeError: If the replacement does not fit the slot (an expression
            where a relation is required, or the other way round)
    """
    path = tuple(position)
    return _replace(statement, path, replacement, statement, path)


def _replace(term: Term, path: Position, replacement: Term, root: Term, full: Position) -> Term:
    if not path:
        return replacement
    index, rest = path[0], path[1:]
    kids = term.children()
    if not isinstance(index, int) or not 0 <= index < len(kids):
        raise InvalidPositionError(full, root)
    return term.with_child(index, _replace(kids[index], rest, replacement, root, full))


def replace_all(statement: Term, pattern: Term, replacement: Term) -> Term:
    """Replace every occurrence of ``pattern``; occurrences never overlap."""
    if statement == pattern:
        return replacement
    result = statement
    for index, kid in enumerate(statement.children()):
        new_kid = replace_all(kid, pattern, replacement)
        if new_kid is not kid:
            result = result.with_child(index, new_kid)
    return result
