"""Reading and writing statements as text."""

from proofforest.core.logic import Expression, Relation, Term
from .base import StatementFormat
from .text import TextFormat
from .registry import FormatRegistry, get_format_handler


def parse_statement(text: str, format_name: str = "text") -> Relation:
    """Parse a statement, e.g. ``"x + 0 = x"``."""
    return get_format_handler(format_name).parse_string(text)


def parse_expression(text: str, format_name: str = "text") -> Expression:
    """Parse an expression, e.g. ``"a * (b + c)"``."""
    return get_format_handler(format_name).parse_expression(text)


def format_term(term: Term, format_name: str = "text") -> str:
    return get_format_handler(format_name).format_term(term)


__all__ = [
    'StatementFormat', 'TextFormat', 'FormatRegistry', 'get_format_handler',
    'parse_statement', 'parse_expression', 'format_term'
]
