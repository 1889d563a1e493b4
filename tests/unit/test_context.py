"""Unit tests for Context and ContextSchema."""

from __future__ import annotations

import math

import pytest

from verdict.context import Context, ContextSchema, SchemaMismatch
from verdict.exceptions.context import SchemaMismatchError
from verdict.expressions.types import BOOL, FLOAT, INT, STR, Type, TypeKind
from verdict.expressions.values import Value


class TestContextSetters:
    """Each setter returns a new context holding the typed value."""

    def test_new_is_empty(self) -> None:
        context = Context.new()
        assert len(context) == 0
        assert context.get("anything") is None

    @pytest.mark.parametrize(
        ("setter", "content", "expected"),
        [
            ("set_bool", True, BOOL),
            ("set_int", 3, INT),
            ("set_float", 0.25, FLOAT),
            ("set_str", "x", STR),
            ("set_bool_array", [True, True], Type.array(TypeKind.BOOL, 2)),
            ("set_int_array", [1, 2, 3], Type.array(TypeKind.INT, 3)),
            ("set_float_array", [1.5], Type.array(TypeKind.FLOAT, 1)),
            ("set_str_array", ["a", "b"], Type.array(TypeKind.STR, 2)),
        ],
    )
    def test_typed_setters(self, setter: str, content: object, expected: Type) -> None:
        context = getattr(Context(), setter)("name", content)
        value = context.get("name")
        assert value is not None
        assert value.concrete_type() == expected

    def test_setter_validates_python_type(self) -> None:
        with pytest.raises(ValueError):
            Context().set_int("flag", True)
        with pytest.raises(ValueError):
            Context().set_str_array("tags", ["a", 1])

    def test_float_setters_reject_non_finite(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            Context().set_float("score", math.nan)
        with pytest.raises(ValueError, match="finite"):
            Context().set_float_array("scores", [0.5, math.inf])

    def test_last_write_wins(self) -> None:
        context = Context().set_int("n", 1).set_str("n", "one")
        assert context.get("n") == Value(TypeKind.STR, "one")

    def test_other_names_preserved(self) -> None:
        context = Context().set_int("a", 1).set_int("b", 2).set_int("a", 3)
        assert context.get("b") == Value(TypeKind.INT, 2)
        assert context.get("a") == Value(TypeKind.INT, 3)


class TestContextImmutability:
    """Earlier contexts never observe later updates."""

    def test_setter_does_not_mutate_receiver(self) -> None:
        base = Context().set_int("a", 1)
        updated = base.set_int("a", 2).set_bool("b", True)
        assert base.get("a") == Value(TypeKind.INT, 1)
        assert "b" not in base
        assert updated.get("a") == Value(TypeKind.INT, 2)

    def test_mapping_passed_in_is_copied(self) -> None:
        data = {"a": Value(TypeKind.INT, 1)}
        context = Context(data)
        data["a"] = Value(TypeKind.INT, 2)
        assert context.get("a") == Value(TypeKind.INT, 1)

    def test_rejects_non_value_entries(self) -> None:
        with pytest.raises(TypeError):
            Context({"a": 1})  # type: ignore[dict-item]
        with pytest.raises(TypeError):
            Context().set("a", 1)  # type: ignore[arg-type]


class TestContextHelpers:
    """Conversions and container protocol."""

    def test_from_dict_and_to_dict(self) -> None:
        data = {"userId": 1, "roles": ["admin"], "beta": False}
        context = Context.from_dict(data)
        assert context.to_dict() == data
        assert context.get("beta") == Value(TypeKind.BOOL, False)

    def test_names_sorted(self) -> None:
        assert Context.from_dict({"b": 1, "a": 2}).names() == ["a", "b"]

    def test_equality(self) -> None:
        assert Context().set_int("a", 1) == Context.from_dict({"a": 1})
        assert Context().set_int("a", 1) != Context().set_float("a", 1.0)

    def test_iteration(self) -> None:
        assert set(Context.from_dict({"a": 1, "b": 2})) == {"a", "b"}


class TestContextSchemaValidate:
    """Validation collects every mismatch."""

    def test_matching_context(self) -> None:
        schema = ContextSchema().declare("userId", INT)
        assert schema.validate(Context().set_int("userId", 1)) == []

    def test_missing_variable(self) -> None:
        schema = ContextSchema().declare("userId", INT)
        assert schema.validate(Context()) == [SchemaMismatch("userId", INT, None)]

    def test_wrong_type(self) -> None:
        schema = ContextSchema().declare("userId", INT)
        mismatches = schema.validate(Context().set_str("userId", "x"))
        assert mismatches == [SchemaMismatch("userId", INT, STR)]

    def test_array_length_is_part_of_type(self) -> None:
        schema = ContextSchema().declare("pair", Type.array(TypeKind.INT, 2))
        assert schema.validate(Context().set_int_array("pair", [1, 2])) == []
        assert schema.validate(Context().set_int_array("pair", [1, 2, 3])) == [
            SchemaMismatch(
                "pair", Type.array(TypeKind.INT, 2), Type.array(TypeKind.INT, 3)
            )
        ]

    def test_collects_all_mismatches_sorted(self) -> None:
        schema = (
            ContextSchema()
            .declare("b", STR)
            .declare("a", INT)
            .declare("c", BOOL)
        )
        context = Context().set_bool("c", True).set_float("a", 1.0)
        assert schema.validate(context) == [
            SchemaMismatch("a", INT, FLOAT),
            SchemaMismatch("b", STR, None),
        ]

    def test_undeclared_variables_ignored(self) -> None:
        schema = ContextSchema().declare("a", INT)
        context = Context().set_int("a", 1).set_str("extra", "ignored")
        assert schema.validate(context) == []

    def test_empty_schema_accepts_anything(self) -> None:
        assert ContextSchema.new().validate(Context().set_int("x", 1)) == []

    def test_mismatch_is_a_tuple(self) -> None:
        name, expected, actual = SchemaMismatch("a", INT, None)
        assert (name, expected, actual) == ("a", INT, None)


class TestContextSchemaBuilding:
    """Declaration semantics and helpers."""

    def test_declare_overwrites(self) -> None:
        schema = ContextSchema().declare("a", INT).declare("a", STR)
        assert schema.get("a") == STR
        assert len(schema) == 1

    def test_declare_does_not_mutate_receiver(self) -> None:
        base = ContextSchema().declare("a", INT)
        base.declare("b", STR)
        assert "b" not in base

    def test_from_dict_accepts_text_and_types(self) -> None:
        schema = ContextSchema.from_dict({"a": "IntArray(2)", "b": BOOL})
        assert schema.get("a") == Type.array(TypeKind.INT, 2)
        assert schema.get("b") == BOOL
        assert schema.names() == ["a", "b"]

    def test_from_dict_rejects_bad_type(self) -> None:
        with pytest.raises(ValueError):
            ContextSchema.from_dict({"a": "Number"})

    def test_rejects_non_type_entries(self) -> None:
        with pytest.raises(TypeError):
            ContextSchema({"a": "Int"})  # type: ignore[dict-item]

    def test_check_raises_with_all_mismatches(self) -> None:
        schema = ContextSchema().declare("a", INT).declare("b", STR)
        with pytest.raises(SchemaMismatchError) as exc_info:
            schema.check(Context())
        assert [m.name for m in exc_info.value.mismatches] == ["a", "b"]
        assert "a: expected Int, got nothing" in str(exc_info.value)

    def test_is_valid(self) -> None:
        schema = ContextSchema().declare("a", INT)
        assert schema.is_valid(Context().set_int("a", 1))
        assert not schema.is_valid(Context())
