"""Tests for typed expression literals."""

from fractions import Fraction

import pytest
from ordo import (
    E, Symbol, Literal, LiteralType, Extension, make_literal, numeric_literal,
    literal_apply, is_literal, literal_type, is_abstract, fmap, expression_of,
    freeze, is_zero, is_one, is_exact,
)


x, y = Symbol("x"), Symbol("y")
PLUS = Symbol("+")


class TestConstruction:
    """Tests for building literals."""

    def test_make_literal(self):
        """make_literal starts with empty metadata."""
        lit = make_literal(LiteralType.NUMERIC, x)
        assert lit.type is LiteralType.NUMERIC
        assert lit.expression == x
        assert dict(lit.metadata) == {}

    def test_literal_apply(self):
        """literal_apply builds an application-form expression."""
        lit = literal_apply(LiteralType.VECTOR, PLUS, [x, 1])
        assert lit.expression == [PLUS, x, 1]
        assert lit.type is LiteralType.VECTOR

    def test_numeric_literal(self):
        """numeric_literal uses the NUMERIC type."""
        assert numeric_literal(3).type is LiteralType.NUMERIC

    def test_unknown_type_rejected(self):
        """Only LiteralType members and Extensions are accepted."""
        with pytest.raises(TypeError):
            Literal("numeric", x)

    def test_immutable(self):
        """Fields and metadata cannot be changed."""
        lit = numeric_literal(x)
        with pytest.raises(AttributeError):
            lit.expression = y
        with pytest.raises(TypeError):
            lit.metadata["unit"] = "m"

    def test_metadata_copied_at_construction(self):
        """Later changes to the source dict do not leak in."""
        meta = {"unit": "m"}
        lit = Literal(LiteralType.NUMERIC, x, meta)
        meta["unit"] = "s"
        assert lit.metadata["unit"] == "m"


class TestPredicates:
    """Tests for the type-test predicates."""

    def test_is_literal(self):
        """Only Literal instances are literals."""
        assert is_literal(numeric_literal(x))
        assert not is_literal(x)
        assert not is_literal([PLUS, x, 1])

    def test_literal_type(self):
        """literal_type is None for non-literals."""
        assert literal_type(numeric_literal(x)) is LiteralType.NUMERIC
        assert literal_type(x) is None
        assert literal_type(42) is None

    def test_abstract_types(self):
        """Every fixed literal type is abstract."""
        for t in LiteralType:
            assert is_abstract(make_literal(t, x))

    def test_extension_not_abstract_by_default(self):
        """Extensions opt in to being abstract."""
        assert not is_abstract(make_literal(Extension("quaternion"), x))
        assert is_abstract(make_literal(Extension("quaternion", abstract=True), x))

    def test_non_literal_not_abstract(self):
        """Raw values are never abstract."""
        assert not is_abstract(x)
        assert not is_abstract(3)


class TestFunctorial:
    """Tests for fmap and expression_of."""

    def test_round_trip(self):
        """expression_of(make_literal(t, e)) is e."""
        for e in (x, 3, [PLUS, x, [Symbol("*"), 2, y]]):
            for t in LiteralType:
                assert expression_of(make_literal(t, e)) is e

    def test_fmap_identity(self):
        """Mapping the identity gives an equal literal."""
        lit = make_literal(LiteralType.ABSTRACT_MATRIX, [PLUS, x, 1])
        assert fmap(lambda e: e, lit) == lit

    def test_fmap_preserves_type_and_metadata(self):
        """fmap changes only the expression."""
        lit = numeric_literal(x).with_metadata(unit="m")
        mapped = fmap(lambda e: [Symbol("sin"), e], lit)
        assert mapped.expression == [Symbol("sin"), x]
        assert mapped.type is LiteralType.NUMERIC
        assert mapped.metadata["unit"] == "m"

    def test_fmap_returns_new_literal(self):
        """The original literal is unchanged."""
        lit = numeric_literal(x)
        mapped = fmap(lambda e: y, lit)
        assert lit.expression == x
        assert mapped.expression == y

    def test_expression_of_passes_through(self):
        """Raw values are returned as is."""
        assert expression_of(x) is x
        tree = [PLUS, x, 1]
        assert expression_of(tree) is tree

    def test_with_metadata_replaces(self):
        """with_metadata updates keys and keeps the rest."""
        lit = numeric_literal(x).with_metadata(unit="m", source="input")
        updated = lit.with_metadata(unit="s")
        assert dict(updated.metadata) == {"unit": "s", "source": "input"}
        assert lit.metadata["unit"] == "m"


class TestEquality:
    """Tests for literal equality, ordering and hashing."""

    def test_equal_literals(self):
        """Structurally equal literals are equal."""
        assert numeric_literal(E("(+ x 1)")) == numeric_literal(E("(+ x 1)"))

    def test_numerically_equal_expressions(self):
        """Expressions are compared with the canonical order."""
        assert numeric_literal([PLUS, x, 1]) == numeric_literal((PLUS, x, 1.0))

    def test_type_must_match(self):
        """Literals of different types differ."""
        assert numeric_literal(x) != make_literal(LiteralType.VECTOR, x)

    def test_metadata_must_match(self):
        """Literals with different metadata differ."""
        assert numeric_literal(x) != numeric_literal(x).with_metadata(unit="m")

    def test_not_equal_to_raw_expression(self):
        """A literal never equals its bare expression."""
        assert numeric_literal(x) != x

    def test_ordering_follows_expressions(self):
        """Literals order by value, not by printed form."""
        assert numeric_literal(9) < numeric_literal(10)
        assert max([numeric_literal(2), numeric_literal(10), numeric_literal(9)]) == numeric_literal(10)

    def test_ordering_against_raw_values(self):
        """Literals cannot be ordered against raw values with <."""
        with pytest.raises(TypeError):
            numeric_literal(1) < 2

    def test_hashable(self):
        """Equal literals hash equally."""
        a = numeric_literal(E("(+ x 1)"))
        b = numeric_literal(E("(+ x 1)"))
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_nan_literals_hash_equally(self):
        """Literals wrapping NaN are equal and share a hash."""
        a, b = numeric_literal(float("nan")), numeric_literal(float("nan"))
        assert a == b
        assert hash(a) == hash(b)


class TestNumericHooks:
    """Tests for numeric predicates delegating to numeric expressions."""

    def test_zero_and_one(self):
        """Numeric expressions answer the predicates."""
        assert is_zero(numeric_literal(0))
        assert is_one(numeric_literal(1))
        assert not is_zero(numeric_literal(1))
        assert numeric_literal(1).is_identity()

    def test_symbolic_expression_is_never_zero(self):
        """Symbolic expressions answer False."""
        lit = numeric_literal(x)
        assert not lit.is_zero()
        assert not lit.is_one()
        assert not lit.is_exact()
        assert not lit.is_identity()

    def test_exactness(self):
        """Integers and fractions are exact, floats are not."""
        assert is_exact(numeric_literal(3))
        assert is_exact(numeric_literal(Fraction(1, 3)))
        assert not is_exact(numeric_literal(0.5))


class TestDisplay:
    """Tests for freezing and printing."""

    def test_str_renders_expression_only(self):
        """str() omits type and metadata."""
        lit = numeric_literal(E("(+ x 1)")).with_metadata(unit="m")
        assert str(lit) == "(+ x 1)"

    def test_freeze(self):
        """freeze returns the frozen expression."""
        assert freeze(numeric_literal(E("(* 2 y)"))) == [Symbol("*"), 2, y]

    def test_repr_names_type(self):
        """repr() includes the type tag."""
        assert "NUMERIC" in repr(numeric_literal(x))
