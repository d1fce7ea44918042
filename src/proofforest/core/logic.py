"""Statement terms: expressions and the relations built from them.

Every node is an immutable value with structural equality. The navigator
and the tactics only rely on two things:

- ``children()`` returns the ordered, finite tuple of direct subterms
- ``with_child(index, child)`` returns a copy with one child replaced,
  sharing every other child with the original

Binary nodes use index 0 for the left operand and 1 for the right one.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Tuple, Union


INFIX_OPERATORS = ('+', '-', '*', '/', '^', '∘', '∪', '∩', '\\', '×')
COMPARATORS = ('<', '<=', '>', '>=', '!=', '∈', '⊆')


class Term:
    """Base class for every node of the statement grammar."""

    def children(self) -> Tuple['Term', ...]:
        return ()

    def with_child(self, index: int, child: 'Term') -> 'Term':
        raise IndexError(f"{type(self).__name__} has no child {index}")

    def depth(self) -> int:
        kids = self.children()
        if kids:
            return 1 + max(kid.depth() for kid in kids)
        return 0

    def size(self) -> int:
        return 1 + sum(kid.size() for kid in self.children())

    def variables(self) -> set:
        """Names of all variables occurring in this term."""
        names = set()
        for kid in self.children():
            names |= kid.variables()
        return names


class Expression(Term):
    """A mathematical object: variable, number, operation or view."""

    def __add__(self, other):
        return Operation('+', (self, _coerce(other)))

    def __radd__(self, other):
        return Operation('+', (_coerce(other), self))

    def __sub__(self, other):
        return Operation('-', (self, _coerce(other)))

    def __rsub__(self, other):
        return Operation('-', (_coerce(other), self))

    def __mul__(self, other):
        return Operation('*', (self, _coerce(other)))

    def __rmul__(self, other):
        return Operation('*', (_coerce(other), self))

    def __truediv__(self, other):
        return Operation('/', (self, _coerce(other)))

    def __pow__(self, other):
        return Operation('^', (self, _coerce(other)))

    def __neg__(self):
        return Operation('-', (self,))


class Relation(Term):
    """A statement that can be proven: equality, connective or predicate."""


def _coerce(value) -> Expression:
    if isinstance(value, Expression):
        return value
    if isinstance(value, (int, float, Fraction)) and not isinstance(value, bool):
        return Number(value)
    raise TypeError(f"Expected Expression, got {value!r}")


def _check(expected, value, owner: str):
    if not isinstance(value, expected):
        raise TypeError(f"{owner} expects {expected.__name__}, got {value!r}")
    return value


def _check_all(expected, values: Iterable, owner: str) -> tuple:
    return tuple(_check(expected, value, owner) for value in values)


def _replaced(items: tuple, index: int, child) -> tuple:
    if not 0 <= index < len(items):
        raise IndexError(f"Child index {index} out of range for {len(items)} children")
    return items[:index] + (child,) + items[index + 1:]


# Expressions

@dataclass(frozen=True)
class Variable(Expression):
    name: str

    def __post_init__(self):
        _check(str, self.name, 'Variable')

    def variables(self) -> set:
        return {self.name}

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Number(Expression):
    value: Union[int, Fraction, float]

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, Fraction, float)):
            raise TypeError(f"Number expects int, Fraction or float, got {self.value!r}")

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Operation(Expression):
    """An operator or named function applied to operands."""
    operator: str
    operands: Tuple[Expression, ...]

    def __post_init__(self):
        object.__setattr__(self, 'operands', _check_all(Expression, self.operands, 'Operation'))

    @property
    def is_binary(self) -> bool:
        return len(self.operands) == 2

    def children(self):
        return self.operands

    def with_child(self, index, child):
        _check(Expression, child, 'Operation')
        return Operation(self.operator, _replaced(self.operands, index, child))

    def __str__(self):
        if self.operator in INFIX_OPERATORS and len(self.operands) == 2:
            left, right = self.operands
            return f"{_wrap(left)} {self.operator} {_wrap(right)}"
        if self.operator == '-' and len(self.operands) == 1:
            return f"-{_wrap(self.operands[0])}"
        return f"{self.operator}({', '.join(map(str, self.operands))})"


@dataclass(frozen=True)
class ViewAs(Expression):
    """An expression read under another interpretation, e.g. as a group element."""
    expression: Expression
    view: str

    def __post_init__(self):
        _check(Expression, self.expression, 'ViewAs')

    def children(self):
        return (self.expression,)

    def with_child(self, index, child):
        if index != 0:
            raise IndexError(f"ViewAs has no child {index}")
        return ViewAs(_check(Expression, child, 'ViewAs'), self.view)

    def __str__(self):
        return f"{_wrap(self.expression)} as {self.view}"


@dataclass(frozen=True)
class RelationExpression(Expression):
    """A relation used where an expression is expected, e.g. a rewrite equation."""
    relation: 'Relation'

    def __post_init__(self):
        _check(Relation, self.relation, 'RelationExpression')

    def children(self):
        return (self.relation,)

    def with_child(self, index, child):
        if index != 0:
            raise IndexError(f"RelationExpression has no child {index}")
        return RelationExpression(_check(Relation, child, 'RelationExpression'))

    def __str__(self):
        return f"[{self.relation}]"


def _wrap(expr: Expression) -> str:
    if isinstance(expr, ViewAs):
        return f"({expr})"
    if isinstance(expr, Operation) and expr.operator in INFIX_OPERATORS and expr.is_binary:
        return f"({expr})"
    return str(expr)


# Relations

@dataclass(frozen=True)
class Equal(Relation):
    left: Expression
    right: Expression

    def __post_init__(self):
        _check(Expression, self.left, 'Equal')
        _check(Expression, self.right, 'Equal')

    def children(self):
        return (self.left, self.right)

    def with_child(self, index, child):
        _check(Expression, child, 'Equal')
        left, right = _replaced((self.left, self.right), index, child)
        return Equal(left, right)

    def __str__(self):
        return f"{self.left} = {self.right}"


@dataclass(frozen=True)
class Predicate(Relation):
    """A domain relation such as ``even(n)`` or ``a < b``."""
    name: str
    args: Tuple[Expression, ...]

    def __post_init__(self):
        object.__setattr__(self, 'args', _check_all(Expression, self.args, 'Predicate'))

    def children(self):
        return self.args

    def with_child(self, index, child):
        _check(Expression, child, 'Predicate')
        return Predicate(self.name, _replaced(self.args, index, child))

    def __str__(self):
        if self.name in COMPARATORS and len(self.args) == 2:
            return f"{self.args[0]} {self.name} {self.args[1]}"
        return f"{self.name}({', '.join(map(str, self.args))})"


@dataclass(frozen=True)
class Not(Relation):
    operand: Relation

    def __post_init__(self):
        _check(Relation, self.operand, 'Not')

    def children(self):
        return (self.operand,)

    def with_child(self, index, child):
        if index != 0:
            raise IndexError(f"Not has no child {index}")
        return Not(_check(Relation, child, 'Not'))

    def __str__(self):
        return f"~{_paren(self.operand)}"


@dataclass(frozen=True)
class And(Relation):
    operands: Tuple[Relation, ...]

    def __post_init__(self):
        object.__setattr__(self, 'operands', _check_all(Relation, self.operands, 'And'))

    def children(self):
        return self.operands

    def with_child(self, index, child):
        _check(Relation, child, 'And')
        return And(_replaced(self.operands, index, child))

    def __str__(self):
        return ' & '.join(_paren(r) for r in self.operands)


@dataclass(frozen=True)
class Or(Relation):
    operands: Tuple[Relation, ...]

    def __post_init__(self):
        object.__setattr__(self, 'operands', _check_all(Relation, self.operands, 'Or'))

    def children(self):
        return self.operands

    def with_child(self, index, child):
        _check(Relation, child, 'Or')
        return Or(_replaced(self.operands, index, child))

    def __str__(self):
        return ' | '.join(_paren(r) for r in self.operands)


@dataclass(frozen=True)
class Implies(Relation):
    antecedent: Relation
    consequent: Relation

    def __post_init__(self):
        _check(Relation, self.antecedent, 'Implies')
        _check(Relation, self.consequent, 'Implies')

    def children(self):
        return (self.antecedent, self.consequent)

    def with_child(self, index, child):
        _check(Relation, child, 'Implies')
        antecedent, consequent = _replaced((self.antecedent, self.consequent), index, child)
        return Implies(antecedent, consequent)

    def __str__(self):
        return f"{_paren(self.antecedent)} -> {_paren(self.consequent)}"


@dataclass(frozen=True)
class Equivalent(Relation):
    left: Relation
    right: Relation

    def __post_init__(self):
        _check(Relation, self.left, 'Equivalent')
        _check(Relation, self.right, 'Equivalent')

    def children(self):
        return (self.left, self.right)

    def with_child(self, index, child):
        _check(Relation, child, 'Equivalent')
        left, right = _replaced((self.left, self.right), index, child)
        return Equivalent(left, right)

    def __str__(self):
        return f"{_paren(self.left)} <-> {_paren(self.right)}"


def _paren(relation: Relation) -> str:
    if isinstance(relation, (And, Or, Implies, Equivalent)):
        return f"({relation})"
    return str(relation)


# Convenience constructors

def var(name: str) -> Variable:
    return Variable(name)


def num(value) -> Number:
    return Number(value)


def op(operator: str, *operands) -> Operation:
    return Operation(operator, tuple(_coerce(o) for o in operands))


def eq(left, right) -> Equal:
    return Equal(_coerce(left), _coerce(right))


def pred(name: str, *args) -> Predicate:
    return Predicate(name, tuple(_coerce(a) for a in args))
