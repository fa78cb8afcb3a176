"""
Atoms and value hooks shared by the expression and operator layers.

Symbols are the leaf variables of expression trees. They are kept distinct
from Python strings, which are ordinary string values in ORDO.
"""

import numbers
from typing import Any, Tuple


class Symbol:
    """
    A named symbolic atom.

    Symbols compare equal when their names are equal and print as their
    bare name:

        x = Symbol("x")
        x == Symbol("x")   # => True
        x == "x"           # => False
        str(x)             # => "x"
    """

    __slots__ = ('name',)

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise TypeError("Symbol: name must be a non-empty string")
        object.__setattr__(self, 'name', name)

    def __setattr__(self, key, value):
        raise AttributeError("Symbol is immutable")

    def __eq__(self, other):
        if isinstance(other, Symbol):
            return self.name == other.name
        return NotImplemented

    def __hash__(self):
        return hash((Symbol, self.name))

    def __repr__(self) -> str:
        return self.name

    __str__ = __repr__


def symbols(names: str) -> Tuple[Symbol, ...]:
    """
    Create several symbols at once.

    Example:
        x, y, z = symbols("x y z")
    """
    return tuple(Symbol(n) for n in names.split())


def is_symbol(x: Any) -> bool:
    return isinstance(x, Symbol)


def is_number(x: Any) -> bool:
    """True for Python numbers, excluding bool."""
    return isinstance(x, numbers.Number) and not isinstance(x, bool)


def is_real(x: Any) -> bool:
    """True for real numbers, excluding bool."""
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def is_zero(x: Any) -> bool:
    if is_number(x):
        return x == 0
    hook = getattr(x, 'is_zero', None)
    return bool(hook()) if callable(hook) else False


def is_one(x: Any) -> bool:
    if is_number(x):
        return x == 1
    hook = getattr(x, 'is_one', None)
    return bool(hook()) if callable(hook) else False


def is_identity(x: Any) -> bool:
    """Multiplicative identity test; for numbers this is is_one."""
    if is_number(x):
        return x == 1
    hook = getattr(x, 'is_identity', None)
    return bool(hook()) if callable(hook) else False


def is_exact(x: Any) -> bool:
    """Integers and fractions are exact; floats and complex are not."""
    if is_number(x):
        return isinstance(x, numbers.Rational)
    hook = getattr(x, 'is_exact', None)
    return bool(hook()) if callable(hook) else False


def freeze(x: Any) -> Any:
    """
    Return the canonical, side-effect-free display form of a value.

    Objects providing a freeze() method (Operators, Literals) supply their
    own form; sequences are frozen element-wise; anything else is returned
    unchanged.
    """
    hook = getattr(x, 'freeze', None)
    if callable(hook) and not isinstance(x, type):
        return hook()
    if isinstance(x, (list, tuple)):
        return type(x)(freeze(e) for e in x)
    return x
