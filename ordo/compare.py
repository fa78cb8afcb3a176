"""
Canonical total order over expression atoms and trees.

The order is a compatibility surface: canonical forms produced by
simplification depend on it, so the rules below must not change.

    1. The empty sequence is less than everything but itself.
    2. reals < symbols < strings < sequences < Literals < anything else
    3. Reals compare by value, with NaN after every other real and equal
       only to NaN. Symbols compare by name, strings lexicographically.
    4. Shorter sequences are less; equal-length sequences compare
       element by element with this same order.
    5. Literals compare by type tag, then by their expressions, then by
       their metadata items.
    6. Two values outside the kinds above compare by the key
       (qualified type name, repr). This is arbitrary but stable; it is
       not guaranteed to be semantic, and distinct objects with identical
       reprs compare equal.
"""

from functools import cmp_to_key
from typing import Any

from .value import Symbol, is_real

_REAL, _SYMBOL, _STRING, _SEQUENCE, _LITERAL, _OPAQUE = range(6)


def _is_sequence(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def _rank(x: Any) -> int:
    # literal imports this module
    from .literal import Literal

    if is_real(x):
        return _REAL
    if isinstance(x, Symbol):
        return _SYMBOL
    if isinstance(x, str):
        return _STRING
    if _is_sequence(x):
        return _SEQUENCE
    if isinstance(x, Literal):
        return _LITERAL
    return _OPAQUE


def _sign(l, r) -> int:
    if l < r:
        return -1
    if l > r:
        return 1
    return 0


def _is_nan(x) -> bool:
    return x != x


def _compare_reals(l, r) -> int:
    l_nan, r_nan = _is_nan(l), _is_nan(r)
    if l_nan or r_nan:
        return _sign(l_nan, r_nan)
    return _sign(l, r)


def _fallback_key(x: Any):
    t = type(x)
    return (f"{t.__module__}.{t.__qualname__}", repr(x))


def _type_key(tag):
    from .literal import Extension, LiteralType

    if isinstance(tag, Extension):
        return (1, int(tag.abstract), _fallback_key(tag.tag))
    return (0, list(LiteralType).index(tag), ("", ""))


def _metadata_items(literal) -> list:
    return sorted(([k, v] for k, v in literal.metadata.items()), key=canonical_key)


def _compare_literals(l, r) -> int:
    c = _sign(_type_key(l.type), _type_key(r.type))
    if c == 0:
        c = compare(l.expression, r.expression)
    if c == 0:
        c = compare(_metadata_items(l), _metadata_items(r))
    return c


def compare(l: Any, r: Any) -> int:
    """
    Compare two expressions, returning -1, 0 or 1.

    Examples:
        compare([], [1])          # => -1
        compare(3, Symbol("x"))   # => -1
        compare([1, 2], [1, 2, 3])  # => -1
        compare([2], [1, 9])      # => -1 (shorter wins before heads)
    """
    l_empty = _is_sequence(l) and not l
    r_empty = _is_sequence(r) and not r
    if l_empty:
        return 0 if r_empty else -1
    if r_empty:
        return 1

    l_rank, r_rank = _rank(l), _rank(r)
    if l_rank != r_rank:
        return -1 if l_rank < r_rank else 1

    if l_rank == _REAL:
        return _compare_reals(l, r)
    if l_rank == _SYMBOL:
        return _sign(l.name, r.name)
    if l_rank == _STRING:
        return _sign(l, r)
    if l_rank == _SEQUENCE:
        if len(l) != len(r):
            return -1 if len(l) < len(r) else 1
        for a, b in zip(l, r):
            c = compare(a, b)
            if c != 0:
                return c
        return 0
    if l_rank == _LITERAL:
        return _compare_literals(l, r)
    return _sign(_fallback_key(l), _fallback_key(r))


# Key adapter for sorted(), min(), max()
canonical_key = cmp_to_key(compare)


def is_sorted(seq: Any) -> bool:
    """True if seq is not a sequence, or its adjacent elements are in order."""
    if not _is_sequence(seq):
        return True
    return all(compare(a, b) <= 0 for a, b in zip(seq, seq[1:]))


def sort(seq: Any) -> Any:
    """
    Return a new sequence of the same type sorted canonically.

    Non-sequences are returned unchanged.
    """
    if not _is_sequence(seq):
        return seq
    return type(seq)(sorted(seq, key=canonical_key))
