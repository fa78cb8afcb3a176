"""
Walks over raw expression trees and Literals.

Trees are Symbols, plain values, or sequences whose first element is the
operator. All walks are postorder: children are handled before the node
that contains them.
"""

import math
from typing import Any, Callable, Dict, Iterable, Mapping, Set, Tuple

from . import generic
from .errors import UnresolvedOperatorError
from .literal import Literal, expression_of, numeric_literal
from .value import Symbol, is_real

EnvType = Mapping[Symbol, Any]

_MISSING = object()


def _is_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def variables_in(expr: Any) -> Set[Symbol]:
    """
    Return the set of symbols occurring in expr outside operator position.

    Heads of applications are never variables, at any depth.

    Examples:
        variables_in(E("(+ x (* 2 y))"))  # => {x, y}
        variables_in(Symbol("x"))         # => {x}
    """
    if isinstance(expr, Symbol):
        return {expr}
    if isinstance(expr, Literal):
        return variables_in(expr.expression)
    found: Set[Symbol] = set()
    if _is_sequence(expr) and expr:
        head, args = expr[0], expr[1:]
        if _is_sequence(head) or isinstance(head, Literal):
            found |= variables_in(head)
        for arg in args:
            found |= variables_in(arg)
    return found


def _same(node: Any, key: Any) -> bool:
    """Structural equality; lists and tuples match, 1 does not match True."""
    if _is_sequence(node) and _is_sequence(key):
        return len(node) == len(key) and all(_same(a, b) for a, b in zip(node, key))
    return type(node) is type(key) and node == key


def _rebuild(node, children):
    return type(node)(children)


def substitute(expr: Any, old: Any, new: Any = _MISSING) -> Any:
    """
    Replace parts of expr, rebuilding the tree bottom-up.

    Call as substitute(expr, old, new) or substitute(expr, {old: new, ...}).
    Children are rewritten before their parent is tested against the
    replacement keys. Literals anywhere in the tree are rewritten through
    fmap, so their type and metadata are kept.

    Examples:
        substitute(E("(+ x 1)"), x, y)          # => (+ y 1)
        substitute(E("(* x y)"), {x: 2, y: 3})  # => (* 2 3)
    """
    if new is _MISSING:
        if not isinstance(old, Mapping):
            raise TypeError("substitute: expected (expr, old, new) or (expr, mapping)")
        pairs: Tuple = tuple(old.items())
    else:
        pairs = ((old, new),)

    def replace(node):
        for key, replacement in pairs:
            if _same(node, key):
                return replacement
        return node

    def walk(node):
        if isinstance(node, Literal):
            return replace(node.fmap(walk))
        if _is_sequence(node):
            return replace(_rebuild(node, [walk(child) for child in node]))
        return replace(node)

    return walk(expr)


def evaluate(expr: Any, sym_to_var: EnvType, sym_to_fn: EnvType) -> Any:
    """
    Interpret expr in the given environments.

    A symbol evaluates to its image in sym_to_var, or to itself if unbound.
    An application resolves its head in sym_to_fn, evaluates its arguments
    left to right, then calls the function with them. Any other value
    evaluates to itself.

    Examples:
        evaluate(E("(+ x 2)"), {x: 5}, ARITHMETIC_ENV)  # => 7
        evaluate(y, {}, {})                             # => y

    Raises:
        UnresolvedOperatorError: if a head has no entry in sym_to_fn
    """
    if isinstance(expr, Symbol):
        return sym_to_var.get(expr, expr)
    if _is_sequence(expr) and expr:
        head = expr[0]
        try:
            fn = sym_to_fn[head]
        except (KeyError, TypeError):
            raise UnresolvedOperatorError(head) from None
        args = [evaluate(arg, sym_to_var, sym_to_fn) for arg in expr[1:]]
        return fn(*args)
    return expr


# ============================================================
# Standard function environments
# ============================================================

def _variadic(identity: Any, binary: Callable) -> Callable:
    """(op) = identity, (op x) = x, (op x y z) = ((x op y) op z)"""
    def fn(*args):
        result = identity
        for i, a in enumerate(args):
            result = a if i == 0 else binary(result, a)
        return result
    return fn


def _minus(*args):
    if not args:
        return 0
    if len(args) == 1:
        return generic.negate(args[0])
    result = args[0]
    for a in args[1:]:
        result = generic.sub(result, a)
    return result


def _unary(name: str, fn: Callable) -> Callable:
    def apply(x):
        if is_real(x):
            return fn(x)
        return numeric_literal([Symbol(name), expression_of(x)])
    apply.__name__ = name
    return apply


def _environment(entries: Iterable[Tuple[str, Callable]]) -> Dict[Symbol, Callable]:
    return {Symbol(name): fn for name, fn in entries}


# Arithmetic: +, -, *, /, ^ (alias expt), square
ARITHMETIC_ENV: Dict[Symbol, Callable] = _environment([
    ("+", _variadic(0, generic.add)),
    ("*", _variadic(1, generic.mul)),
    ("-", _minus),
    ("/", generic.div),
    ("^", generic.expt),
    ("expt", generic.expt),
    ("square", generic.square),
])

# Arithmetic plus elementary functions of one argument
MATH_ENV: Dict[Symbol, Callable] = {
    **ARITHMETIC_ENV,
    **_environment((name, _unary(name, getattr(math, name)))
                   for name in ("sqrt", "exp", "log", "sin", "cos", "tan")),
}
