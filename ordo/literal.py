"""
Typed wrappers for raw symbolic expressions.

A Literal pairs a raw expression tree with an abstract type tag and a
read-only metadata mapping. Literals are immutable; fmap and
with_metadata return new Literals.

    x = make_literal(LiteralType.NUMERIC, Symbol("x"))
    y = fmap(lambda e: [Symbol("sin"), e], x)   # same type and metadata
    expression_of(y)                            # => [sin, x]
"""

from enum import Enum
from functools import total_ordering
from types import MappingProxyType
from typing import Any, Callable, Hashable, List, Mapping, Optional, Union

from . import value
from .compare import compare
from .sexpr import format_sexpr


class LiteralType(Enum):
    """The fixed set of abstract literal types."""
    NUMERIC = "numeric"
    VECTOR = "vector"
    ABSTRACT_DOWN = "abstract-down"
    ABSTRACT_MATRIX = "abstract-matrix"


class Extension:
    """
    An implementation-specific literal type carrying an opaque tag.

    Extensions are not abstract unless constructed with abstract=True.
    """

    __slots__ = ('tag', 'abstract')

    def __init__(self, tag: Hashable, abstract: bool = False):
        object.__setattr__(self, 'tag', tag)
        object.__setattr__(self, 'abstract', abstract)

    def __setattr__(self, key, value):
        raise AttributeError("Extension is immutable")

    def __eq__(self, other):
        if isinstance(other, Extension):
            return self.tag == other.tag and self.abstract == other.abstract
        return NotImplemented

    def __hash__(self):
        return hash((Extension, self.tag, self.abstract))

    def __repr__(self) -> str:
        return f"Extension({self.tag!r})"


TypeTag = Union[LiteralType, Extension]


def _hashable(expr: Any) -> Hashable:
    if isinstance(expr, (list, tuple)):
        return tuple(_hashable(e) for e in expr)
    if value.is_real(expr) and expr != expr:
        return "nan"
    try:
        hash(expr)
    except TypeError:
        return repr(expr)
    return expr


@total_ordering
class Literal:
    """
    Immutable (type, expression, metadata) triple.

    Equality and ordering follow the canonical order: type tags first,
    then expressions, then metadata items. str() renders the expression
    only.
    """

    __slots__ = ('_type', '_expression', '_metadata')

    def __init__(self, type: TypeTag, expression: Any,
                 metadata: Optional[Mapping] = None):
        if not isinstance(type, (LiteralType, Extension)):
            raise TypeError(f"Literal: unknown literal type {type!r}")
        object.__setattr__(self, '_type', type)
        object.__setattr__(self, '_expression', expression)
        object.__setattr__(self, '_metadata', MappingProxyType(dict(metadata or {})))

    def __setattr__(self, key, value):
        raise AttributeError("Literal is immutable")

    @property
    def type(self) -> TypeTag:
        return self._type

    @property
    def expression(self) -> Any:
        return self._expression

    @property
    def metadata(self) -> Mapping:
        return self._metadata

    def fmap(self, f: Callable[[Any], Any]) -> 'Literal':
        """Apply f to the wrapped expression, keeping type and metadata."""
        return Literal(self._type, f(self._expression), self._metadata)

    def with_metadata(self, **items) -> 'Literal':
        """Return a copy whose metadata is updated with items."""
        return Literal(self._type, self._expression, {**self._metadata, **items})

    # Numeric predicates only look through to numeric expressions

    def is_zero(self) -> bool:
        return value.is_number(self._expression) and value.is_zero(self._expression)

    def is_one(self) -> bool:
        return value.is_number(self._expression) and value.is_one(self._expression)

    def is_identity(self) -> bool:
        return value.is_number(self._expression) and value.is_identity(self._expression)

    def is_exact(self) -> bool:
        return value.is_number(self._expression) and value.is_exact(self._expression)

    def freeze(self) -> Any:
        return value.freeze(self._expression)

    def __eq__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return compare(self, other) == 0

    def __lt__(self, other):
        if not isinstance(other, Literal):
            return NotImplemented
        return compare(self, other) < 0

    def __hash__(self):
        return hash((self._type, _hashable(self._expression),
                     frozenset((k, _hashable(v)) for k, v in self._metadata.items())))

    def __str__(self) -> str:
        return format_sexpr(self._expression)

    def __repr__(self) -> str:
        return f"Literal({self._type!r}, {format_sexpr(self._expression)})"


ABSTRACT_TYPES = frozenset(LiteralType)


def make_literal(type: TypeTag, expr: Any) -> Literal:
    """Wrap expr in a Literal of the given type with empty metadata."""
    return Literal(type, expr)


def numeric_literal(expr: Any) -> Literal:
    """Wrap expr as a numeric Literal."""
    return Literal(LiteralType.NUMERIC, expr)


def literal_apply(type: TypeTag, op: Any, args: List) -> Literal:
    """
    Build a Literal holding the application (op . args).

    Example:
        literal_apply(LiteralType.NUMERIC, Symbol("+"), [x, 1])  # (+ x 1)
    """
    return Literal(type, [op] + list(args))


def is_literal(x: Any) -> bool:
    return isinstance(x, Literal)


def literal_type(x: Any) -> Optional[TypeTag]:
    """The literal type of x, or None if x is not a Literal."""
    return x.type if isinstance(x, Literal) else None


def is_abstract(x: Any) -> bool:
    """True if x is a Literal with one of the abstract types."""
    if not isinstance(x, Literal):
        return False
    t = x.type
    if isinstance(t, Extension):
        return t.abstract
    return t in ABSTRACT_TYPES


def fmap(f: Callable[[Any], Any], literal: Literal) -> Literal:
    """Apply f to literal's expression, preserving type and metadata."""
    return literal.fmap(f)


def expression_of(x: Any) -> Any:
    """Unwrap a Literal; any other value is returned unchanged."""
    return x.expression if isinstance(x, Literal) else x
