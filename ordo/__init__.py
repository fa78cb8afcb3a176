"""
ORDO - Operators, Rings and Deterministic Ordering

Operator algebra and canonical symbolic expressions for computer algebra.

Quick Start:
    from ordo import E, Symbol, Operator, Arity, evaluate, ARITHMETIC_ENV

    # Evaluate an expression tree
    x = Symbol("x")
    evaluate(E("(+ x 2)"), {x: 5}, ARITHMETIC_ENV)  # => 7

    # Operators compose under multiplication
    double = Operator(lambda f: lambda *a: 2 * f(*a), Arity.exactly(1), Symbol("double"))
    (double ** 3)(lambda t: t)(1)                    # => 8

Canonical Order:
    numbers < symbols < strings < sequences < Literals; the empty sequence
    is least. NaN sorts after every other number.
    Sequences compare by length, then element by element. Literals compare
    by type, then expression, then metadata.

    sort([Symbol("b"), "s", 2, [1]])  # => [2, b, 's', [1]]

Expressions:
    Symbol("x")               - a variable
    [Symbol("+"), x, 1]       - the application (+ x 1)
    numeric_literal(expr)     - expr wrapped as a typed Literal
"""

__version__ = "0.1.0"

from .errors import (
    OrdoError,
    PreconditionError,
    ArityError,
    UnresolvedOperatorError,
    NoApplicableMethodError,
)

from .value import (
    Symbol,
    symbols,
    is_symbol,
    is_number,
    is_zero,
    is_one,
    is_identity,
    is_exact,
    freeze,
)

# Canonical ordering
from .compare import compare, is_sorted, sort, canonical_key

from .sexpr import E, parse_sexpr, format_sexpr

from .literal import (
    Literal,
    LiteralType,
    Extension,
    ABSTRACT_TYPES,
    make_literal,
    numeric_literal,
    literal_apply,
    is_literal,
    literal_type,
    is_abstract,
    fmap,
    expression_of,
)

from .walker import (
    variables_in,
    substitute,
    evaluate,
    ARITHMETIC_ENV,
    MATH_ENV,
)

from .arity import Arity, arity_of, with_arity, joint_arity

from . import generic
from .generic import Kind, kind, Generic

# Operator algebra (importing registers its generic methods)
from .operator import (
    Operator,
    IDENTITY,
    make_operator,
    is_operator,
    number_to_operator,
    function_to_operator,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Errors
    "OrdoError",
    "PreconditionError",
    "ArityError",
    "UnresolvedOperatorError",
    "NoApplicableMethodError",
    # Values
    "Symbol",
    "symbols",
    "is_symbol",
    "is_number",
    "is_zero",
    "is_one",
    "is_identity",
    "is_exact",
    "freeze",
    # Ordering
    "compare",
    "is_sorted",
    "sort",
    "canonical_key",
    # S-expressions
    "E",
    "parse_sexpr",
    "format_sexpr",
    # Literals
    "Literal",
    "LiteralType",
    "Extension",
    "ABSTRACT_TYPES",
    "make_literal",
    "numeric_literal",
    "literal_apply",
    "is_literal",
    "literal_type",
    "is_abstract",
    "fmap",
    "expression_of",
    # Walker
    "variables_in",
    "substitute",
    "evaluate",
    "ARITHMETIC_ENV",
    "MATH_ENV",
    # Arity
    "Arity",
    "arity_of",
    "with_arity",
    "joint_arity",
    # Generic dispatch
    "generic",
    "Kind",
    "kind",
    "Generic",
    # Operators
    "Operator",
    "IDENTITY",
    "make_operator",
    "is_operator",
    "number_to_operator",
    "function_to_operator",
]
