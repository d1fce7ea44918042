"""Plain text statement format.

The syntax is the one terms print themselves in, so
``parse_statement(str(relation)) == relation`` for relations built from
binary infix operators, named functions, views and the connectives::

    x + 0 = x
    even(n) | odd(n)
    (a * b) * c = a * (b * c)
    x ∈ A -> x ∈ A ∪ B
    g as group_element = e

Numbers are the exception. A Fraction prints as ``1/2`` and reads back
as a division of two integers, and a negative literal reads back as a
negation, so those terms do not round trip.
"""

from typing import List

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from proofforest.core.logic import (
    Expression, Relation, Term,
    Variable, Number, Operation, ViewAs, RelationExpression,
    Equal, Predicate, Not, And, Or, Implies, Equivalent
)
from .base import StatementFormat


statement_parser = Lark(r"""
    %import common.WS
    %import common.NUMBER
    %ignore WS

    ?relation : equivalence

    ?equivalence : implication
                 | implication "<->" implication -> equivalent
    ?implication : disjunction
                 | disjunction "->" implication -> implies
    ?disjunction : conjunction
                 | conjunction ("|" conjunction)+ -> or_
    ?conjunction : negation
                 | negation ("&" negation)+ -> and_
    ?negation : "~" negation -> not_
              | atom
    ?atom : expr "=" expr -> equal
          | expr COMPARATOR expr -> comparison
          | NAME "(" arguments? ")" -> predicate
          | "(" relation ")"

    ?expr : sum
    ?sum : product
         | sum ADD_OP product -> binary
    ?product : power
             | product MUL_OP power -> binary
    ?power : unary
           | unary "^" power -> exponent
    ?unary : "-" unary -> neg
           | view
    ?view : primary
          | primary "as" NAME -> view_as
    ?primary : NUMBER -> number
             | NAME -> variable
             | NAME "(" arguments? ")" -> function
             | "(" expr ")"
             | "[" relation "]" -> relation_expression

    arguments : expr ("," expr)*

    COMPARATOR : "<=" | ">=" | "!=" | "<" | ">" | "∈" | "⊆"
    ADD_OP : "+" | "-" | "∪" | "∩" | "\\"
    MUL_OP : "*" | "/" | "∘" | "×"
    NAME : /(?!as\b)[^\W\d]\w*'*/
""", start=["relation", "expr"])


@v_args(inline=True)
class StatementTransformer(Transformer):
    """Turn a parse tree into terms."""

    # Relations
    def equivalent(self, left, right):
        return Equivalent(left, right)

    def implies(self, antecedent, consequent):
        return Implies(antecedent, consequent)

    def or_(self, *operands):
        return Or(operands)

    def and_(self, *operands):
        return And(operands)

    def not_(self, operand):
        return Not(operand)

    def equal(self, left, right):
        return Equal(left, right)

    def comparison(self, left, comparator, right):
        return Predicate(str(comparator), (left, right))

    def predicate(self, name, arguments=()):
        return Predicate(str(name), tuple(arguments))

    # Expressions
    def arguments(self, *args):
        return list(args)

    def binary(self, left, operator, right):
        return Operation(str(operator), (left, right))

    def exponent(self, base, exponent):
        return Operation('^', (base, exponent))

    def neg(self, operand):
        return Operation('-', (operand,))

    def view_as(self, expression, view):
        return ViewAs(expression, str(view))

    def number(self, token):
        text = str(token)
        if any(c in text for c in '.eE'):
            return Number(float(text))
        return Number(int(text))

    def variable(self, name):
        return Variable(str(name))

    def function(self, name, arguments=()):
        return Operation(str(name), tuple(arguments))

    def relation_expression(self, relation):
        return RelationExpression(relation)


class TextFormat(StatementFormat):
    """Handler for the plain text statement syntax."""

    def __init__(self):
        self._transformer = StatementTransformer()

    def _parse(self, content: str, start: str) -> Term:
        try:
            tree = statement_parser.parse(content, start=start)
            return self._transformer.transform(tree)
        except LarkError as e:
            raise ValueError(f"Cannot parse {start} {content!r}: {e}") from e

    def parse_string(self, content: str) -> Relation:
        return self._parse(content, 'relation')

    def parse_expression(self, content: str) -> Expression:
        return self._parse(content, 'expr')

    def format_term(self, term: Term) -> str:
        return str(term)

    @property
    def name(self) -> str:
        return "text"

    @property
    def extensions(self) -> List[str]:
        return ['.stmt', '.txt']
