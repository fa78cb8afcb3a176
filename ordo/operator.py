"""
Operators: named, arity-tagged transformations from functions to functions.

Operators form a ring. Addition and subtraction act pointwise on the
functions an operator produces, while multiplication is composition of
operator actions, so it is not commutative in general:

    (o * p)(f)  ==  o(p(f))
    (o + p)(f)  ==  lambda *args: o(f)(*args) + p(f)(*args)
    o ** 3      ==  o * o * o

Numbers, symbolic scalars and plain functions combine with operators by
first being lifted into operators: a scalar n becomes "multiply the
result by n" and a function g becomes "multiply the result pointwise by
g". All combinations are registered with the generic dispatch registry,
so generic.add(o, 2) and o + 2 are the same thing.

Each function an operator produces is a fresh function object carrying
an ``arity`` attribute; no function passed in is ever modified.
"""

import logging
import numbers
from typing import Any, Callable

from . import generic
from .arity import Arity, arity_of, joint_arity
from .errors import PreconditionError
from .generic import Kind
from .sexpr import format_sexpr
from .value import Symbol, freeze

logger = logging.getLogger(__name__)

ADD = Symbol("add")
SUB = Symbol("sub")
MUL = Symbol("mul")
TRANSPOSE = Symbol("transpose")


class Operator:
    """
    An immutable transformation of one or more functions into a function.

    Attributes:
        transform: callable taking the argument function(s), returning a function
        arity: Arity expected of the argument functions
        name: display form, an expression atom or tree
    """

    __slots__ = ('transform', 'arity', 'name')

    kind = Kind.OPERATOR

    def __init__(self, transform: Callable[..., Callable], arity: Arity, name: Any):
        object.__setattr__(self, 'transform', transform)
        object.__setattr__(self, 'arity', arity)
        object.__setattr__(self, 'name', name)

    def __setattr__(self, key, value):
        raise AttributeError("Operator is immutable")

    def __call__(self, *fns: Callable) -> Callable:
        return self.transform(*fns)

    def freeze(self) -> Any:
        return self.name

    def is_zero(self) -> bool:
        return False

    def is_one(self) -> bool:
        return False

    def __add__(self, other):
        return generic.add(self, other)

    def __radd__(self, other):
        return generic.add(other, self)

    def __sub__(self, other):
        return generic.sub(self, other)

    def __rsub__(self, other):
        return generic.sub(other, self)

    def __mul__(self, other):
        return generic.mul(self, other)

    def __rmul__(self, other):
        return generic.mul(other, self)

    def __pow__(self, n):
        return generic.expt(self, n)

    def __neg__(self):
        return generic.negate(self)

    def __repr__(self) -> str:
        return f"Operator({format_sexpr(self.name)}, {self.arity!r})"


def _function(body: Callable, arity: Arity) -> Callable:
    # body is always a closure created for this call
    body.arity = arity
    return body


def _arity_of_all(fns) -> Arity:
    return joint_arity(arity_of(f) for f in fns)


def make_operator(transform: Callable[..., Callable], name: Any,
                  arity: Arity = Arity.exactly(1)) -> Operator:
    """
    Create an operator from a function transformer.

    Example:
        D = make_operator(derivative, Symbol("D"))
    """
    return Operator(transform, arity, name)


def is_operator(x: Any) -> bool:
    return isinstance(x, Operator)


def _identity_transform(f: Callable) -> Callable:
    return _function(lambda *args: f(*args), arity_of(f))


IDENTITY = Operator(_identity_transform, Arity.at_least(0), Symbol("identity"))


# ============================================================
# Lifts
# ============================================================

def number_to_operator(n: Any) -> Operator:
    """The operator that scales the result of its argument function by n."""
    def transform(*fns):
        f, = fns
        return _function(lambda *args: generic.mul(n, f(*args)), arity_of(f))
    return Operator(transform, Arity.at_least(0), freeze(n))


def function_to_operator(f: Callable) -> Operator:
    """The operator that multiplies its argument function pointwise by f."""
    def transform(*fns):
        g, = fns
        return _function(lambda *args: generic.mul(f(*args), g(*args)), arity_of(g))
    return Operator(transform, Arity.at_least(0),
                    Symbol(getattr(f, '__name__', None) or 'fn'))


# ============================================================
# Ring operations
# ============================================================

def _pointwise(combine: Callable, head: Symbol, o: Operator, p: Operator) -> Operator:
    arity = joint_arity([o.arity, p.arity])

    def transform(*fns):
        of, pf = o(*fns), p(*fns)
        return _function(lambda *args: combine(of(*args), pf(*args)), _arity_of_all(fns))

    name = [head, o.name, p.name]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("combined operator %s", format_sexpr(name))
    return Operator(transform, arity, name)


def add(o: Operator, p: Operator) -> Operator:
    """The operator whose action is the pointwise sum of o's and p's."""
    return _pointwise(generic.add, ADD, o, p)


def sub(o: Operator, p: Operator) -> Operator:
    """The operator whose action is the pointwise difference of o's and p's."""
    return _pointwise(generic.sub, SUB, o, p)


def mul(o: Operator, p: Operator) -> Operator:
    """The composition of o and p: (o * p)(f) == o(p(f))."""
    arity = joint_arity([o.arity, p.arity])

    def transform(*fns):
        composed = o(p(*fns))
        return _function(lambda *args: composed(*args), _arity_of_all(fns))

    name = [MUL, o.name, p.name]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("combined operator %s", format_sexpr(name))
    return Operator(transform, arity, name)


def expt(o: Operator, n: Any) -> Operator:
    """
    The n-fold composition of o with itself; IDENTITY when n is 0.

    Raises:
        PreconditionError: if n is not a non-negative integer
    """
    if not isinstance(n, numbers.Integral) or isinstance(n, bool) or n < 0:
        raise PreconditionError(f"expt: exponent must be a non-negative integer, got {n!r}")
    result = IDENTITY
    for _ in range(n):
        result = mul(result, o)
    return result


def square(o: Operator) -> Operator:
    return mul(o, o)


def transpose(o: Operator) -> Operator:
    """A unary operator transposing the values o's functions produce."""
    def transform(f):
        of = o(f)
        return _function(lambda *args: generic.transpose(of(*args)), arity_of(f))
    return Operator(transform, Arity.exactly(1), [TRANSPOSE, o.name])


def cross_product(o: Operator, p: Operator) -> Callable[..., Callable]:
    """
    Return a function (not an Operator) taking f to the pointwise cross
    product of o(f) and p(f).
    """
    def apply(*fns):
        of, pf = o(*fns), p(*fns)
        return _function(lambda *args: generic.cross_product(of(*args), pf(*args)),
                         _arity_of_all(fns))
    return apply


# ============================================================
# Generic registrations
# ============================================================

_OP = Kind.OPERATOR

generic.add.register(_OP, _OP)(add)
generic.sub.register(_OP, _OP)(sub)
generic.mul.register(_OP, _OP)(mul)
generic.cross_product.register(_OP, _OP)(cross_product)
generic.expt.register(_OP, Kind.NUMBER)(expt)
generic.square.register(_OP)(square)
generic.transpose.register(_OP)(transpose)


@generic.negate.register(_OP)
def _negate_operator(o):
    return mul(number_to_operator(-1), o)


@generic.mul.register(_OP, Kind.FUNCTION)
def _mul_operator_function(o, f):
    return mul(o, function_to_operator(f))


@generic.mul.register(Kind.FUNCTION, _OP)
def _mul_function_operator(f, o):
    return mul(function_to_operator(f), o)


for _scalar in (Kind.NUMBER, Kind.SYMBOLIC):
    for _combine in (add, sub, mul):
        _generic_op = getattr(generic, _combine.__name__)
        _generic_op.register(_OP, _scalar)(
            lambda o, n, _combine=_combine: _combine(o, number_to_operator(n)))
        _generic_op.register(_scalar, _OP)(
            lambda n, o, _combine=_combine: _combine(number_to_operator(n), o))
