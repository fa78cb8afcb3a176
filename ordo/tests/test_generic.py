"""Tests for the generic dispatch registry."""

from fractions import Fraction

import pytest
from ordo import (
    Symbol, Kind, kind, Generic, generic, numeric_literal, IDENTITY,
    LiteralType, make_literal, literal_type,
    NoApplicableMethodError, PreconditionError, E,
)


x, y = Symbol("x"), Symbol("y")
M = Symbol("M")


class TestKind:
    """Tests for operand classification."""

    def test_kinds(self):
        """Each family of values has its kind."""
        assert kind(3) is Kind.NUMBER
        assert kind(2.5) is Kind.NUMBER
        assert kind(Fraction(1, 2)) is Kind.NUMBER
        assert kind(x) is Kind.SYMBOLIC
        assert kind(numeric_literal(x)) is Kind.SYMBOLIC
        assert kind(lambda t: t) is Kind.FUNCTION
        assert kind(IDENTITY) is Kind.OPERATOR
        assert kind([1, 2]) is Kind.SEQUENCE
        assert kind("s") is Kind.OTHER
        assert kind(True) is Kind.OTHER

    def test_declared_kind(self):
        """A kind attribute overrides classification."""
        class Tagged:
            kind = Kind.NUMBER
        assert kind(Tagged()) is Kind.NUMBER


class TestGeneric:
    """Tests for Generic registration and dispatch."""

    def test_register_and_call(self):
        """Registered methods are found by operand kinds."""
        g = Generic("pair")

        @g.register(Kind.NUMBER, Kind.SYMBOLIC)
        def _pair(n, s):
            return (n, s)

        assert g(1, x) == (1, x)
        assert g.signatures() == frozenset({(Kind.NUMBER, Kind.SYMBOLIC)})

    def test_no_method(self):
        """A missing combination raises with the operation and kinds."""
        g = Generic("pair")
        with pytest.raises(NoApplicableMethodError) as exc:
            g(1, x)
        assert exc.value.operation == "pair"
        assert exc.value.kinds == (Kind.NUMBER, Kind.SYMBOLIC)
        assert "pair" in str(exc.value)

    def test_no_method_is_type_error(self):
        """NoApplicableMethodError is a TypeError."""
        with pytest.raises(TypeError):
            generic.add("a", "b")

    def test_registration_order_independent(self):
        """Methods for different kinds do not shadow each other."""
        g = Generic("g")
        g.register(Kind.NUMBER)(lambda n: "number")
        g.register(Kind.SYMBOLIC)(lambda s: "symbolic")
        assert g(1) == "number"
        assert g(x) == "symbolic"

    def test_repr(self):
        """repr() names the operation."""
        assert "add" in repr(generic.add)


class TestNumberMethods:
    """Tests for arithmetic on numbers."""

    def test_arithmetic(self):
        """Numbers use Python arithmetic."""
        assert generic.add(2, 3) == 5
        assert generic.sub(2, 3) == -1
        assert generic.mul(2, 3) == 6
        assert generic.expt(2, 3) == 8
        assert generic.negate(4) == -4
        assert generic.square(5) == 25

    def test_exact_division(self):
        """Dividing integers stays exact."""
        assert generic.div(1, 3) == Fraction(1, 3)
        assert generic.div(6, 3) == 2
        assert isinstance(generic.div(6, 3), int)
        assert generic.div(1.0, 4) == 0.25


class TestSymbolicMethods:
    """Tests for arithmetic involving symbolic values."""

    def test_builds_literals(self):
        """Symbolic operands produce numeric literals."""
        assert generic.add(x, 1) == numeric_literal(E("(+ x 1)"))
        assert generic.mul(2, y) == numeric_literal(E("(* 2 y)"))
        assert generic.sub(x, y) == numeric_literal(E("(- x y)"))
        assert generic.div(x, 2) == numeric_literal(E("(/ x 2)"))
        assert generic.expt(x, 2) == numeric_literal(E("(expt x 2)"))

    def test_nests_literal_expressions(self):
        """Literal operands are unwrapped into the new expression."""
        inner = generic.add(x, 1)
        assert generic.mul(inner, y) == numeric_literal(E("(* (+ x 1) y)"))

    def test_trivial_identities(self):
        """Only the trivial identities are folded."""
        assert generic.add(0, x) == x
        assert generic.add(x, 0) == x
        assert generic.mul(1, x) == x
        assert generic.mul(x, 0) == 0
        assert generic.sub(x, 0) == x
        assert generic.expt(x, 0) == 1
        assert generic.expt(x, 1) == x
        assert generic.div(x, 1) == x

    def test_negate(self):
        """Negation builds (- x)."""
        assert generic.negate(x) == numeric_literal(E("(- x)"))
        assert generic.sub(0, x) == numeric_literal(E("(- x)"))

    def test_transpose_scalar(self):
        """Scalars are their own transpose."""
        assert generic.transpose(x) is x
        assert generic.transpose(3) == 3


class TestTypedLiterals:
    """Tests for arithmetic on vector and matrix literals."""

    def test_scaling_keeps_type(self):
        """Scaling a matrix literal gives a matrix literal."""
        m = make_literal(LiteralType.ABSTRACT_MATRIX, M)
        result = generic.mul(2, m)
        assert literal_type(result) is LiteralType.ABSTRACT_MATRIX
        assert result.expression == E("(* 2 M)")

    def test_keeps_metadata(self):
        """The typed operand's metadata carries over."""
        v = make_literal(LiteralType.VECTOR, Symbol("v")).with_metadata(dim=3)
        result = generic.add(v, numeric_literal(x))
        assert literal_type(result) is LiteralType.VECTOR
        assert result.metadata["dim"] == 3

    def test_negate_keeps_type(self):
        """Negating a vector literal gives a vector literal."""
        v = make_literal(LiteralType.VECTOR, Symbol("v"))
        assert literal_type(generic.negate(v)) is LiteralType.VECTOR

    def test_same_types_combine(self):
        """Two literals of one type combine into that type."""
        a = make_literal(LiteralType.ABSTRACT_DOWN, Symbol("p"))
        b = make_literal(LiteralType.ABSTRACT_DOWN, Symbol("q"))
        assert literal_type(generic.sub(a, b)) is LiteralType.ABSTRACT_DOWN

    def test_mixed_types_rejected(self):
        """Literals of different non-numeric types do not combine."""
        v = make_literal(LiteralType.VECTOR, Symbol("v"))
        m = make_literal(LiteralType.ABSTRACT_MATRIX, M)
        with pytest.raises(PreconditionError):
            generic.add(v, m)


class TestSequenceMethods:
    """Tests for vectors and matrices."""

    def test_transpose_matrix(self):
        """A sequence of rows is transposed."""
        assert generic.transpose([[1, 2, 3], [4, 5, 6]]) == [[1, 4], [2, 5], [3, 6]]

    def test_transpose_vector(self):
        """A flat vector is returned as is."""
        assert generic.transpose([1, 2]) == [1, 2]

    def test_cross_product(self):
        """Cross products of numeric 3-vectors."""
        assert generic.cross_product([1, 0, 0], [0, 1, 0]) == [0, 0, 1]
        assert generic.cross_product([1, 2, 3], [4, 5, 6]) == [-3, 6, -3]

    def test_cross_product_symbolic(self):
        """Components may be symbolic."""
        result = generic.cross_product([x, 0, 0], [0, y, 0])
        assert result[:2] == [0, 0]
        assert result[2] == numeric_literal(E("(* x y)"))

    def test_cross_product_requires_3_vectors(self):
        """Other lengths are rejected."""
        with pytest.raises(PreconditionError):
            generic.cross_product([1, 2], [3, 4])
