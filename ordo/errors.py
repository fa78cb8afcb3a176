"""
Exception types raised by ORDO.

All failures are synchronous and raised at the call site. Each class also
derives from the closest built-in exception so callers that only know about
ValueError, LookupError or TypeError still catch them.
"""

from typing import Any, Tuple


class OrdoError(Exception):
    """Base class for ORDO errors."""


class PreconditionError(OrdoError, ValueError):
    """An argument violated an operation's precondition."""


class ArityError(OrdoError, ValueError):
    """Two or more arities could not be reconciled."""


class UnresolvedOperatorError(OrdoError, LookupError):
    """An application head has no entry in the function environment."""

    def __init__(self, operator: Any):
        super().__init__(f"evaluate: unresolved operator '{operator}'")
        self.operator = operator


class NoApplicableMethodError(OrdoError, TypeError):
    """No generic method is registered for the operands' kinds."""

    def __init__(self, operation: str, kinds: Tuple):
        names = ", ".join(k.value for k in kinds)
        super().__init__(f"{operation}: no method for ({names})")
        self.operation = operation
        self.kinds = kinds
