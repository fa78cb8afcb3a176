"""
Explicit double-dispatch registry for generic arithmetic.

Every operand is classified into a closed set of kinds, and each generic
operation looks up its implementation by the tuple of its operands'
kinds. The set of valid combinations is therefore enumerable:

    add.signatures()   # => frozenset({(Kind.NUMBER, Kind.NUMBER), ...})

Other modules register methods with the decorator form:

    @mul.register(Kind.OPERATOR, Kind.FUNCTION)
    def _mul_operator_function(o, f): ...

Arithmetic that involves symbolic values (Symbols or Literals) builds
Literals such as (+ x 1), folding only the trivial identities
0 + x, x * 1, x * 0 and x ^ 0. Real simplification is left to callers.
The result is numeric unless an operand is a vector or matrix Literal,
whose type and metadata carry over.
"""

import logging
import operator as _op
from enum import Enum
from fractions import Fraction
from numbers import Rational
from typing import Any, Callable, Dict, FrozenSet, Tuple

from .errors import NoApplicableMethodError, PreconditionError
from .literal import Literal, LiteralType, expression_of, numeric_literal
from .value import Symbol, is_number, is_one, is_zero

logger = logging.getLogger(__name__)


class Kind(Enum):
    """Closed classification of algebraic values for dispatch."""
    NUMBER = "number"
    SYMBOLIC = "symbolic"
    FUNCTION = "function"
    OPERATOR = "operator"
    SEQUENCE = "sequence"
    OTHER = "other"


def kind(x: Any) -> Kind:
    """
    Classify a value for dispatch.

    Objects may declare their own kind with a ``kind`` attribute holding a
    Kind member; Operators do.
    """
    declared = getattr(x, 'kind', None)
    if isinstance(declared, Kind):
        return declared
    if is_number(x):
        return Kind.NUMBER
    if isinstance(x, (Symbol, Literal)):
        return Kind.SYMBOLIC
    if isinstance(x, (list, tuple)):
        return Kind.SEQUENCE
    if callable(x):
        return Kind.FUNCTION
    return Kind.OTHER


class Generic:
    """A named generic operation dispatching on operand kinds."""

    def __init__(self, name: str):
        self.name = name
        self._methods: Dict[Tuple[Kind, ...], Callable] = {}

    def register(self, *kinds: Kind) -> Callable[[Callable], Callable]:
        """Decorator registering a method for the given operand kinds."""
        def decorator(method: Callable) -> Callable:
            self._methods[kinds] = method
            logger.debug("registered %s%s -> %s", self.name,
                         tuple(k.value for k in kinds), method.__name__)
            return method
        return decorator

    def method_for(self, *kinds: Kind) -> Callable:
        """
        Return the method registered for kinds.

        Raises:
            NoApplicableMethodError: if none is registered
        """
        method = self._methods.get(kinds)
        if method is None:
            raise NoApplicableMethodError(self.name, kinds)
        return method

    def signatures(self) -> FrozenSet[Tuple[Kind, ...]]:
        return frozenset(self._methods)

    def __call__(self, *args):
        return self.method_for(*(kind(a) for a in args))(*args)

    def __repr__(self) -> str:
        return f"Generic({self.name!r}, {len(self._methods)} methods)"


add = Generic("add")
sub = Generic("sub")
mul = Generic("mul")
div = Generic("div")
negate = Generic("negate")
expt = Generic("expt")
square = Generic("square")
transpose = Generic("transpose")
cross_product = Generic("cross_product")

PLUS = Symbol("+")
MINUS = Symbol("-")
TIMES = Symbol("*")
DIVIDE = Symbol("/")
EXPT = Symbol("expt")

_SCALARS = (Kind.NUMBER, Kind.SYMBOLIC)


def _symbolic(head: Symbol, *args) -> Literal:
    """
    Build the Literal (head . args).

    The result takes the type and metadata of the first Literal operand
    whose type is not numeric, so scaling a vector or matrix keeps it one.
    """
    typed = [a for a in args
             if isinstance(a, Literal) and a.type is not LiteralType.NUMERIC]
    if any(a.type != typed[0].type for a in typed[1:]):
        raise PreconditionError(
            f"{head}: cannot combine literal types "
            + ", ".join(repr(a.type) for a in typed))
    expression = [head] + [expression_of(a) for a in args]
    if not typed:
        return numeric_literal(expression)
    return Literal(typed[0].type, expression, typed[0].metadata)


# ============================================================
# Numbers
# ============================================================

def _divide(a, b):
    if isinstance(a, Rational) and isinstance(b, Rational):
        result = Fraction(a, b)
        return result.numerator if result.denominator == 1 else result
    return a / b


for _generic, _fn in ((add, _op.add), (sub, _op.sub), (mul, _op.mul),
                      (div, _divide), (expt, _op.pow)):
    _generic.register(Kind.NUMBER, Kind.NUMBER)(_fn)

negate.register(Kind.NUMBER)(_op.neg)


# ============================================================
# Symbolic scalars
# ============================================================

def _add_symbolic(a, b):
    if is_zero(a):
        return b
    if is_zero(b):
        return a
    return _symbolic(PLUS, a, b)


def _sub_symbolic(a, b):
    if is_zero(b):
        return a
    if is_zero(a):
        return negate(b)
    return _symbolic(MINUS, a, b)


def _mul_symbolic(a, b):
    if is_zero(a) or is_zero(b):
        return 0
    if is_one(a):
        return b
    if is_one(b):
        return a
    return _symbolic(TIMES, a, b)


def _div_symbolic(a, b):
    if is_one(b):
        return a
    return _symbolic(DIVIDE, a, b)


def _expt_symbolic(a, b):
    if is_zero(b):
        return 1
    if is_one(b):
        return a
    return _symbolic(EXPT, a, b)


for _l, _r in ((Kind.NUMBER, Kind.SYMBOLIC), (Kind.SYMBOLIC, Kind.NUMBER),
               (Kind.SYMBOLIC, Kind.SYMBOLIC)):
    add.register(_l, _r)(_add_symbolic)
    sub.register(_l, _r)(_sub_symbolic)
    mul.register(_l, _r)(_mul_symbolic)
    div.register(_l, _r)(_div_symbolic)
    expt.register(_l, _r)(_expt_symbolic)


@negate.register(Kind.SYMBOLIC)
def _negate_symbolic(x):
    return _symbolic(MINUS, x)


for _k in _SCALARS:
    square.register(_k)(lambda x: mul(x, x))
    transpose.register(_k)(lambda x: x)


# ============================================================
# Sequences (vectors and row-major matrices)
# ============================================================

@transpose.register(Kind.SEQUENCE)
def _transpose_sequence(m):
    """Transpose a sequence of rows; a flat vector is returned as is."""
    if m and all(isinstance(row, (list, tuple)) for row in m):
        return [list(column) for column in zip(*m)]
    return m


@cross_product.register(Kind.SEQUENCE, Kind.SEQUENCE)
def _cross_sequences(u, v):
    if len(u) != 3 or len(v) != 3:
        raise PreconditionError("cross_product: both vectors must have 3 components")
    return [
        sub(mul(u[1], v[2]), mul(u[2], v[1])),
        sub(mul(u[2], v[0]), mul(u[0], v[2])),
        sub(mul(u[0], v[1]), mul(u[1], v[0])),
    ]
