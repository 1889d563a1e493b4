"""Unit tests for runtime values: construction, types, accessors and order."""

from __future__ import annotations

import math

import pytest

from verdict.constants import INT_MAX, INT_MIN
from verdict.expressions.types import BOOL, FLOAT, INT, STR, Type, TypeKind
from verdict.expressions.values import Value


class TestValueConstruction:
    """Content is validated against the kind."""

    def test_array_content_is_stored_as_tuple(self) -> None:
        value = Value(TypeKind.INT_ARRAY, [1, 2, 3])
        assert value.content == (1, 2, 3)

    def test_float_accepts_int(self) -> None:
        value = Value(TypeKind.FLOAT, 2)
        assert value.content == 2.0
        assert isinstance(value.content, float)

    @pytest.mark.parametrize(
        ("kind", "content"),
        [
            (TypeKind.INT, True),
            (TypeKind.FLOAT, False),
            (TypeKind.BOOL, 1),
            (TypeKind.STR, 1),
            (TypeKind.INT, 1.5),
            (TypeKind.INT_ARRAY, [1, "2"]),
            (TypeKind.STR_ARRAY, "abc"),
            (TypeKind.BOOL_ARRAY, True),
        ],
    )
    def test_mismatched_content_rejected(self, kind: TypeKind, content: object) -> None:
        with pytest.raises(ValueError):
            Value(kind, content)  # type: ignore[arg-type]

    def test_int_range_is_64_bit(self) -> None:
        assert Value(TypeKind.INT, INT_MAX).content == INT_MAX
        assert Value(TypeKind.INT, INT_MIN).content == INT_MIN
        with pytest.raises(ValueError, match="64-bit"):
            Value(TypeKind.INT, INT_MAX + 1)

    @pytest.mark.parametrize(
        "content", [math.nan, math.inf, -math.inf], ids=["nan", "inf", "-inf"]
    )
    def test_float_must_be_finite(self, content: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            Value(TypeKind.FLOAT, content)
        with pytest.raises(ValueError, match="finite"):
            Value(TypeKind.FLOAT_ARRAY, [1.0, content])

    def test_float_rejects_int_beyond_double_range(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            Value(TypeKind.FLOAT, 10**400)

    def test_values_are_hashable(self) -> None:
        values = {Value(TypeKind.INT, 1), Value(TypeKind.INT, 1)}
        assert len(values) == 1


class TestFromPython:
    """Inference of values from plain Python objects."""

    @pytest.mark.parametrize(
        ("obj", "expected"),
        [
            (True, BOOL),
            (7, INT),
            (7.5, FLOAT),
            ("x", STR),
            ([True, False], Type.array(TypeKind.BOOL, 2)),
            ((1, 2, 3), Type.array(TypeKind.INT, 3)),
            ([1.5], Type.array(TypeKind.FLOAT, 1)),
            (["a", "b"], Type.array(TypeKind.STR, 2)),
        ],
    )
    def test_infers_type(self, obj: object, expected: Type) -> None:
        assert Value.from_python(obj).concrete_type() == expected

    def test_bool_is_not_int(self) -> None:
        assert Value.from_python(True).kind is TypeKind.BOOL
        with pytest.raises(ValueError, match="mixes"):
            Value.from_python([1, True])

    def test_rejects_empty_sequence(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            Value.from_python([])

    def test_rejects_mixed_sequence(self) -> None:
        with pytest.raises(ValueError, match="mixes"):
            Value.from_python([1, 1.5])

    def test_rejects_nested_and_unsupported(self) -> None:
        with pytest.raises(ValueError):
            Value.from_python([[1]])
        with pytest.raises(ValueError):
            Value.from_python(None)
        with pytest.raises(ValueError):
            Value.from_python({"a": 1})


class TestConcreteTypeAndJson:
    """Static type and JSON form of values."""

    def test_array_length_comes_from_content(self) -> None:
        assert Value(TypeKind.STR_ARRAY, ["a", "b", "c"]).concrete_type() == (
            Type.array(TypeKind.STR, 3)
        )

    def test_to_json(self) -> None:
        assert Value(TypeKind.INT, 3).to_json() == 3
        assert Value(TypeKind.BOOL_ARRAY, (True, False)).to_json() == [True, False]

    def test_repr(self) -> None:
        assert repr(Value(TypeKind.INT_ARRAY, [1, 2])) == "Value(IntArray(2), [1, 2])"


class TestAccessors:
    """as_* return content only for the exact kind and length."""

    def test_scalar_accessors(self) -> None:
        value = Value(TypeKind.INT, 5)
        assert value.as_int() == 5
        assert value.as_float() is None
        assert value.as_bool() is None
        assert value.as_str() is None

    def test_bool_false_is_returned_not_absent(self) -> None:
        assert Value(TypeKind.BOOL, False).as_bool() is False

    def test_array_accessor_checks_length(self) -> None:
        value = Value(TypeKind.FLOAT_ARRAY, [1.0, 2.0])
        assert value.as_float_array(2) == (1.0, 2.0)
        assert value.as_float_array(3) is None
        assert value.as_int_array(2) is None

    def test_each_array_accessor(self) -> None:
        assert Value(TypeKind.BOOL_ARRAY, [True]).as_bool_array(1) == (True,)
        assert Value(TypeKind.INT_ARRAY, [1]).as_int_array(1) == (1,)
        assert Value(TypeKind.STR_ARRAY, ["a"]).as_str_array(1) == ("a",)


class TestOrdering:
    """Total order used by the gt operator."""

    def test_numeric_order(self) -> None:
        assert Value(TypeKind.INT, 2) > Value(TypeKind.INT, 1)
        assert not Value(TypeKind.INT, 1) > Value(TypeKind.INT, 1)
        assert Value(TypeKind.FLOAT, 1.5) < Value(TypeKind.FLOAT, 2.5)

    def test_bool_order(self) -> None:
        assert Value(TypeKind.BOOL, True) > Value(TypeKind.BOOL, False)

    def test_string_order_is_by_code_point(self) -> None:
        assert Value(TypeKind.STR, "b") > Value(TypeKind.STR, "a")
        # "Z" (U+005A) sorts before "a" (U+0061)
        assert Value(TypeKind.STR, "a") > Value(TypeKind.STR, "Z")
        assert Value(TypeKind.STR, "é") > Value(TypeKind.STR, "z")

    def test_array_order_is_lexicographic(self) -> None:
        assert Value(TypeKind.INT_ARRAY, [2, 1]) > Value(TypeKind.INT_ARRAY, [1, 9])
        assert Value(TypeKind.INT_ARRAY, [1, 2]) < Value(TypeKind.INT_ARRAY, [1, 3])
        assert Value(TypeKind.INT_ARRAY, [1]) < Value(TypeKind.INT_ARRAY, [1, 0])

    def test_cross_kind_order_by_rank(self) -> None:
        assert Value(TypeKind.STR, "a") > Value(TypeKind.INT, 100)
        assert Value(TypeKind.BOOL, True) < Value(TypeKind.INT, -100)

    def test_le_and_ge(self) -> None:
        one = Value(TypeKind.INT, 1)
        assert one <= Value(TypeKind.INT, 1)
        assert one >= Value(TypeKind.INT, 1)

    def test_sorted(self) -> None:
        values = [Value(TypeKind.INT, n) for n in (3, 1, 2)]
        assert [v.content for v in sorted(values)] == [1, 2, 3]

    def test_comparison_with_non_value_is_unsupported(self) -> None:
        with pytest.raises(TypeError):
            Value(TypeKind.INT, 1) > 0  # noqa: B015


class TestEquality:
    """Values compare by kind and content."""

    def test_same_kind_and_content(self) -> None:
        assert Value(TypeKind.STR_ARRAY, ["a"]) == Value(TypeKind.STR_ARRAY, ("a",))

    def test_int_and_float_are_never_equal(self) -> None:
        assert Value(TypeKind.INT, 1) != Value(TypeKind.FLOAT, 1.0)
