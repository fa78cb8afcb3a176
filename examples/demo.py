#!/usr/bin/env python3
"""
ORDO Feature Demonstration

This script demonstrates the major features of the ORDO library.
"""

from ordo import (
    E, Symbol, symbols, Arity, Operator, IDENTITY, make_operator,
    numeric_literal, substitute, evaluate, variables_in, sort,
    format_sexpr, ARITHMETIC_ENV, UnresolvedOperatorError,
)


def section(title: str):
    """Print a section header."""
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


def demo_canonical_order():
    """Demonstrate the canonical total order."""
    section("Canonical Order")

    x, y = symbols("x y")
    mixed = [[1, 2], "label", y, 3, [], x, -1.5, [0]]
    print(f"  {format_sexpr(mixed)}")
    print(f"  sorted => {format_sexpr(sort(mixed))}")


def demo_walker():
    """Demonstrate variables, substitution and evaluation."""
    section("Expression Walker")

    x, y, z = symbols("x y z")
    expr = E("(+ (* 2 x) (f y))")
    print(f"  variables_in {format_sexpr(expr)} => {format_sexpr(sort(list(variables_in(expr))))}")

    replaced = substitute(expr, {x: z, (Symbol("f"), y): 10})
    print(f"  substitute x->z, (f y)->10 => {format_sexpr(replaced)}")

    print(f"  evaluate with z=4 => {format_sexpr(evaluate(replaced, {z: 4}, ARITHMETIC_ENV))}")
    print(f"  evaluate unbound => {format_sexpr(evaluate(replaced, {}, ARITHMETIC_ENV))}")

    try:
        evaluate(expr, {}, ARITHMETIC_ENV)
    except UnresolvedOperatorError as e:
        print(f"  {e}")


def demo_literals():
    """Demonstrate typed literals."""
    section("Literals")

    x = Symbol("x")
    lit = numeric_literal(E("(+ x 1)")).with_metadata(unit="m")
    moved = substitute(lit, x, 5)
    print(f"  {lit!r} -> {moved!r}, unit={moved.metadata['unit']}")


def demo_operators():
    """Demonstrate the operator ring."""
    section("Operators")

    shift = make_operator(lambda f: lambda t: f(t + 1), Symbol("S"))
    square = lambda t: t * t

    examples = [
        ("S", shift),
        ("S - 1", shift - 1),
        ("S ** 3", shift ** 3),
        ("3 * S + identity", 3 * shift + IDENTITY),
    ]
    for label, o in examples:
        values = [o(square)(t) for t in range(4)]
        print(f"  {label:<18} {format_sexpr(o):<32} on t^2 => {values}")

    scale = Operator(lambda f: lambda *a: 2 * f(*a), Arity.at_least(0), Symbol("double"))
    print(f"  arity of S + double => {(shift + scale).arity}")


def main():
    """Run all demonstrations."""
    print("\n" + "="*60)
    print(" ORDO - Operators, Rings and Deterministic Ordering")
    print("="*60)

    demo_canonical_order()
    demo_walker()
    demo_literals()
    demo_operators()

    print("\n" + "="*60)
    print(" Demo complete!")
    print("="*60 + "\n")


if __name__ == "__main__":
    main()
