"""
S-expression reader and writer for ORDO expression trees.

Trees are nested Python lists whose first element is the operator:

    "(+ x (* 2 y))"  <->  [Symbol("+"), Symbol("x"), [Symbol("*"), 2, Symbol("y")]]

Atoms read as int, Fraction ("1/2"), float, string ("\"text\"") or Symbol,
in that order of preference.
"""

import re
from fractions import Fraction
from typing import Any, List, Tuple, Union

from .value import Symbol, freeze

ExprType = Any

_TOKEN = re.compile(r'\s*(?:(\()|(\))|("(?:[^"\\]|\\.)*")|([^\s()"]+))')
_RATIO = re.compile(r'^[+-]?\d+/\d+$')


def _tokenize(s: str) -> List[str]:
    tokens = []
    pos = 0
    s = s.rstrip()
    while pos < len(s):
        m = _TOKEN.match(s, pos)
        if not m:
            raise ValueError(f"parse_sexpr: unexpected input at {pos}: {s[pos:pos + 10]!r}")
        tokens.append(m.group(m.lastindex))
        pos = m.end()
    return tokens


def _atom(token: str) -> ExprType:
    if token.startswith('"'):
        return re.sub(r'\\(.)', r'\1', token[1:-1])
    try:
        return int(token)
    except ValueError:
        pass
    if _RATIO.match(token):
        return Fraction(token)
    # "inf" and "nan" are symbols, not floats
    if any(c.isdigit() for c in token):
        try:
            return float(token)
        except ValueError:
            pass
    return Symbol(token)


def _read(tokens: List[str], i: int) -> Tuple[ExprType, int]:
    token = tokens[i]
    if token == ')':
        raise ValueError("parse_sexpr: unexpected ')'")
    if token != '(':
        return _atom(token), i + 1
    items = []
    i += 1
    while True:
        if i >= len(tokens):
            raise ValueError("parse_sexpr: missing ')'")
        if tokens[i] == ')':
            return items, i + 1
        item, i = _read(tokens, i)
        items.append(item)


def parse_sexpr(s: str) -> ExprType:
    """
    Parse an S-expression string into a nested list.

    Returns None for blank input.

    Examples:
        "(+ x 1)" -> [+, x, 1]
        "(f \"label\" 1/2)" -> [f, "label", Fraction(1, 2)]

    Raises:
        ValueError: on unbalanced parentheses or trailing input
    """
    tokens = _tokenize(s)
    if not tokens:
        return None
    expr, end = _read(tokens, 0)
    if end != len(tokens):
        raise ValueError("parse_sexpr: trailing input after expression")
    return expr


def format_sexpr(expr: ExprType) -> str:
    """
    Format an expression as an S-expression string.

    Literals and Operators are formatted through their frozen form.

    Examples:
        [+, x, 1] -> "(+ x 1)"
        "text"    -> "\"text\""
        Fraction(1, 2) -> "1/2"
    """
    if isinstance(expr, (list, tuple)):
        return "(" + " ".join(format_sexpr(e) for e in expr) + ")"
    if isinstance(expr, str):
        escaped = expr.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(expr, (Symbol, bool, int, float, Fraction)):
        return str(expr)
    frozen = freeze(expr)
    if frozen is not expr:
        return format_sexpr(frozen)
    return str(expr)


# ============================================================
# Expression Builder
# ============================================================

class _ExprBuilder:
    """
    Expression builder for ORDO.

    Examples:
        from ordo import E

        expr = E("(+ x (* 2 y))")

        x, y = E.vars("x", "y")
        expr = E.op("+", x, E.op("*", 2, y))
    """

    def __call__(self, s: str) -> ExprType:
        """Parse an s-expression string."""
        return parse_sexpr(s)

    def op(self, name: Union[str, Symbol], *args) -> List:
        """
        Build an application with the given operator and arguments.

        A string operator name becomes a Symbol.

        Example:
            E.op("dd", E.op("^", "x", 2), "x")  # string args stay strings
        """
        head = Symbol(name) if isinstance(name, str) else name
        return [head] + list(args)

    def var(self, name: str) -> Symbol:
        """Create a symbol."""
        return Symbol(name)

    def vars(self, *names: str) -> Tuple[Symbol, ...]:
        """
        Create multiple symbols for unpacking.

        Example:
            x, y, z = E.vars("x", "y", "z")
        """
        return tuple(Symbol(n) for n in names)

    def __repr__(self) -> str:
        return "E (expression builder)"


# Singleton instance
E = _ExprBuilder()
