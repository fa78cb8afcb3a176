"""
Function arities.

An Arity is the accepted argument-count contract of a function: an exact
count, a lower bound, or a bounded range. Arities are attached to
functions as an ``arity`` attribute and combined with joint_arity when
functions are built pointwise from others.

    joint_arity([Arity.at_least(1), Arity.exactly(2)])  # => exactly(2)
    joint_arity([Arity.exactly(2), Arity.exactly(3)])   # raises ArityError
"""

import functools
from typing import Any, Callable, Iterable, Optional

from .errors import ArityError


class Arity:
    """Immutable argument-count range [low, high]; high None means unbounded."""

    __slots__ = ('low', 'high')

    def __init__(self, low: int, high: Optional[int]):
        if low < 0 or (high is not None and high < low):
            raise ValueError(f"Arity: invalid range [{low}, {high}]")
        object.__setattr__(self, 'low', low)
        object.__setattr__(self, 'high', high)

    @classmethod
    def exactly(cls, n: int) -> 'Arity':
        return cls(n, n)

    @classmethod
    def at_least(cls, n: int) -> 'Arity':
        return cls(n, None)

    @classmethod
    def between(cls, low: int, high: int) -> 'Arity':
        return cls(low, high)

    def __setattr__(self, key, value):
        raise AttributeError("Arity is immutable")

    @property
    def is_exact(self) -> bool:
        return self.low == self.high

    def accepts(self, n: int) -> bool:
        """True if a call with n arguments satisfies this arity."""
        return n >= self.low and (self.high is None or n <= self.high)

    def join(self, other: 'Arity') -> 'Arity':
        """Intersect two arities, raising ArityError if they are disjoint."""
        low = max(self.low, other.low)
        if self.high is None:
            high = other.high
        elif other.high is None:
            high = self.high
        else:
            high = min(self.high, other.high)
        if high is not None and high < low:
            raise ArityError(f"joint_arity: incompatible arities {self} and {other}")
        return Arity(low, high)

    def __eq__(self, other):
        if isinstance(other, Arity):
            return self.low == other.low and self.high == other.high
        return NotImplemented

    def __hash__(self):
        return hash((Arity, self.low, self.high))

    def __repr__(self) -> str:
        if self.high is None:
            return f"Arity.at_least({self.low})"
        if self.low == self.high:
            return f"Arity.exactly({self.low})"
        return f"Arity.between({self.low}, {self.high})"


DEFAULT_ARITY = Arity.exactly(1)


def arity_of(f: Any) -> Arity:
    """The Arity attached to f, or exactly 1 if none is attached."""
    attached = getattr(f, 'arity', None)
    return attached if isinstance(attached, Arity) else DEFAULT_ARITY


def with_arity(f: Callable, arity: Arity) -> Callable:
    """
    Return a new function that calls f and advertises the given arity.

    f itself is never modified, so the same function may be tagged
    differently by concurrent callers.
    """
    @functools.wraps(f)
    def tagged(*args):
        return f(*args)
    tagged.arity = arity
    return tagged


def joint_arity(arities: Iterable[Arity]) -> Arity:
    """
    The arity of a function built pointwise from functions of the given arities.

    Raises:
        ArityError: if the arities have no common argument count
    """
    result = Arity.at_least(0)
    for a in arities:
        result = result.join(a)
    return result
