#!/usr/bin/env python3
"""
ORDO Command-Line Interface

Evaluates, canonically sorts, substitutes into, or lists the variables of
s-expressions.

Usage:
    ordo -e "(+ x 2)" -b x=5            # Evaluate => 7
    ordo -e "(+ x 2)" -b "x=(* 2 3)"    # Binding values are evaluated => 8
    ordo -e "(sin x)" -p math           # Evaluate with math functions
    ordo -e "(* b a 2)" --sort          # Canonical order => (* 2 a b)
    ordo -e "(f x (g y))" --vars        # Variables => (x y)
    ordo -e "(+ x y)" -s x=z --sort     # Substitute first => (+ y z)
    echo "(+ 1 2)" | ordo               # Filter mode, one expression per line
"""

import argparse
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple

from .compare import sort
from .errors import OrdoError
from .sexpr import format_sexpr, parse_sexpr
from .value import Symbol
from .walker import ARITHMETIC_ENV, MATH_ENV, evaluate, substitute, variables_in

# Built-in function environments
BUILTIN_ENVIRONMENTS: Dict[str, Dict[Symbol, Callable]] = {
    "none": {},
    "arithmetic": ARITHMETIC_ENV,
    "math": MATH_ENV,
}

# Heads whose arguments may be reordered by --sort
COMMUTATIVE = frozenset([Symbol("+"), Symbol("*")])


def parse_assignment(text: str) -> Tuple[Symbol, Any]:
    """
    Parse NAME=EXPR into a (Symbol, expression) pair.

    Example:
        parse_assignment("x=(+ y 1)")  # => (x, [+, y, 1])
    """
    name, sep, expr = text.partition("=")
    if not sep or not name.strip() or not expr.strip():
        raise ValueError(f"expected NAME=EXPR, got {text!r}")
    return Symbol(name.strip()), parse_sexpr(expr)


def evaluate_bindings(assignments: List[Tuple[Symbol, Any]],
                      env: Dict[Symbol, Callable]) -> Dict[Symbol, Any]:
    """
    Evaluate binding values in order; each may refer to earlier ones.

    Example:
        evaluate_bindings([(x, 2), (y, [*, x, 3])], ARITHMETIC_ENV)  # => {x: 2, y: 6}
    """
    bindings: Dict[Symbol, Any] = {}
    for name, expr in assignments:
        bindings[name] = evaluate(expr, bindings, env)
    return bindings


def canonicalize(expr: Any) -> Any:
    """Sort the arguments of commutative applications, bottom-up."""
    if not isinstance(expr, (list, tuple)) or not expr:
        return expr
    children = [canonicalize(e) for e in expr]
    head, args = children[0], children[1:]
    if isinstance(head, Symbol) and head in COMMUTATIVE:
        args = sort(args)
    return type(expr)([head] + list(args))


class ExpressionRunner:
    """Processes expressions according to the selected mode."""

    def __init__(self, env: Optional[Dict[Symbol, Callable]] = None,
                 bindings: Optional[Dict[Symbol, Any]] = None,
                 substitutions: Optional[Dict[Any, Any]] = None,
                 mode: str = "eval"):
        self.env = ARITHMETIC_ENV if env is None else env
        self.bindings = bindings or {}
        self.substitutions = substitutions or {}
        self.mode = mode

    def process(self, expr: Any) -> Any:
        """Apply substitutions, then evaluate, sort, or collect variables."""
        if self.substitutions:
            expr = substitute(expr, self.substitutions)
        if self.mode == "vars":
            return sort(list(variables_in(expr)))
        if self.mode == "sort":
            return canonicalize(expr)
        return evaluate(expr, self.bindings, self.env)

    def process_line(self, line: str) -> str:
        """
        Process one line of input.

        Returns:
            The formatted result, or an "Error: ..." message
        """
        try:
            expr = parse_sexpr(line)
            if expr is None:
                return ""
            return format_sexpr(self.process(expr))
        except (OrdoError, ValueError, TypeError, ArithmeticError) as e:
            return f"Error: {e}"

    def run_expression(self, text: str) -> int:
        """
        Process a single expression.

        Returns:
            Exit code (0 for success)
        """
        return self._emit(self.process_line(text))

    def run_stdin(self) -> int:
        """
        Process expressions from stdin, one per line.

        Returns:
            Exit code (0 for success)
        """
        for line in sys.stdin:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            status = self._emit(self.process_line(line))
            if status:
                return status
        return 0

    def _emit(self, result: str) -> int:
        if result.startswith("Error:"):
            print(result, file=sys.stderr)
            return 1
        if result:
            print(result)
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ordo",
        description="ORDO - evaluate and canonicalize symbolic expressions",
        epilog="Examples:\n"
               "  ordo -e '(+ x 2)' -b x=5        Evaluate\n"
               "  ordo -e '(* b a)' --sort        Canonical order\n"
               "  ordo -e '(f x y)' --vars        List variables\n"
               "  echo '(+ 1 2)' | ordo           Filter mode\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "-e", "--expr",
        help="Process a single expression"
    )

    parser.add_argument(
        "-b", "--bind",
        action="append",
        default=[],
        metavar="NAME=EXPR",
        help="Bind a variable to the evaluated EXPR; later bindings may use earlier ones (can be specified multiple times)"
    )

    parser.add_argument(
        "-s", "--subst",
        action="append",
        default=[],
        metavar="NAME=EXPR",
        help="Substitute for a symbol before processing (can be specified multiple times)"
    )

    parser.add_argument(
        "-p", "--env",
        default="arithmetic",
        choices=sorted(BUILTIN_ENVIRONMENTS),
        help="Function environment used for evaluation"
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--vars",
        dest="mode",
        action="store_const",
        const="vars",
        help="Print the variables of the expression"
    )
    mode.add_argument(
        "--sort",
        dest="mode",
        action="store_const",
        const="sort",
        help="Print the expression with commutative arguments in canonical order"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    env = BUILTIN_ENVIRONMENTS[args.env]
    try:
        bindings = evaluate_bindings([parse_assignment(b) for b in args.bind], env)
        substitutions = dict(parse_assignment(s) for s in args.subst)
    except (OrdoError, ValueError, TypeError, ArithmeticError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    runner = ExpressionRunner(
        env=env,
        bindings=bindings,
        substitutions=substitutions,
        mode=args.mode or "eval",
    )

    if args.expr is not None:
        return runner.run_expression(args.expr)
    return runner.run_stdin()


if __name__ == "__main__":
    sys.exit(main())
