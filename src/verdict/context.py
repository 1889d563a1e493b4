"""Evaluation contexts and the schemas that validate them.

``Context`` maps variable names to values and ``ContextSchema`` maps names
to declared types. Both are persistent: every ``set_*``/``declare`` call
returns a new object and leaves the receiver untouched, so an instance
handed to another thread can never change underneath it.

Example:
    >>> schema = ContextSchema().declare("userId", Type(TypeKind.INT))
    >>> schema.validate(Context().set_int("userId", 1))
    []
    >>> schema.validate(Context())
    [SchemaMismatch(name='userId', expected=Type(Int), actual=None)]
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Any, NamedTuple

from verdict.exceptions.context import SchemaMismatchError
from verdict.expressions.types import Type, TypeKind
from verdict.expressions.values import Value

__all__ = ["Context", "ContextSchema", "SchemaMismatch"]


class SchemaMismatch(NamedTuple):
    """A declared variable the context does not satisfy.

    Attributes:
        name: The declared variable.
        expected: Its declared type.
        actual: The type found in the context, or None if it is unset.
    """

    name: str
    expected: Type
    actual: Type | None


class Context:
    """Immutable mapping of variable name to ``Value``.

    Setters validate the Python type of their argument and raise
    ``ValueError`` on a mismatch (``set_int("x", True)`` is rejected).
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Value] | None = None) -> None:
        for name, value in (values or {}).items():
            if not isinstance(value, Value):
                raise TypeError(
                    f"Context value for '{name}' must be a Value, "
                    f"got {type(value).__name__}"
                )
        self._values: Mapping[str, Value] = MappingProxyType(dict(values or {}))

    @classmethod
    def new(cls) -> Context:
        """Return an empty context."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Context:
        """Build a context from plain Python values (see ``Value.from_python``)."""
        return cls({name: Value.from_python(item) for name, item in data.items()})

    def set(self, name: str, value: Value) -> Context:
        """Return a copy with ``name`` bound to ``value``."""
        if not isinstance(value, Value):
            raise TypeError(f"Expected a Value, got {type(value).__name__}")
        updated = dict(self._values)
        updated[name] = value
        return Context(updated)

    def set_bool(self, name: str, value: bool) -> Context:
        return self.set(name, Value(TypeKind.BOOL, value))

    def set_int(self, name: str, value: int) -> Context:
        return self.set(name, Value(TypeKind.INT, value))

    def set_float(self, name: str, value: float) -> Context:
        return self.set(name, Value(TypeKind.FLOAT, value))

    def set_str(self, name: str, value: str) -> Context:
        return self.set(name, Value(TypeKind.STR, value))

    def set_bool_array(self, name: str, value: Sequence[bool]) -> Context:
        return self.set(name, Value(TypeKind.BOOL_ARRAY, value))

    def set_int_array(self, name: str, value: Sequence[int]) -> Context:
        return self.set(name, Value(TypeKind.INT_ARRAY, value))

    def set_float_array(self, name: str, value: Sequence[float]) -> Context:
        return self.set(name, Value(TypeKind.FLOAT_ARRAY, value))

    def set_str_array(self, name: str, value: Sequence[str]) -> Context:
        return self.set(name, Value(TypeKind.STR_ARRAY, value))

    def get(self, name: str) -> Value | None:
        """Current value of ``name``, or None if unset."""
        return self._values.get(name)

    def names(self) -> list[str]:
        return sorted(self._values)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible view of the context."""
        return {name: value.to_json() for name, value in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Context({self.to_dict()!r})"


class ContextSchema:
    """Immutable mapping of variable name to declared ``Type``.

    Variables present in a context but not declared are ignored by
    validation.
    """

    __slots__ = ("_types",)

    def __init__(self, types: Mapping[str, Type] | None = None) -> None:
        for name, declared in (types or {}).items():
            if not isinstance(declared, Type):
                raise TypeError(
                    f"Declared type for '{name}' must be a Type, "
                    f"got {type(declared).__name__}"
                )
        self._types: Mapping[str, Type] = MappingProxyType(dict(types or {}))

    @classmethod
    def new(cls) -> ContextSchema:
        """Return an empty schema."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Type | str]) -> ContextSchema:
        """Build a schema from types or their textual form (``IntArray(2)``).

        Raises:
            ValueError: If a string does not name a type.
        """
        return cls(
            {
                name: declared if isinstance(declared, Type) else Type.parse(declared)
                for name, declared in data.items()
            }
        )

    def declare(self, name: str, declared: Type) -> ContextSchema:
        """Return a copy with ``name`` declared as ``declared``."""
        updated = dict(self._types)
        updated[name] = declared
        return ContextSchema(updated)

    def get(self, name: str) -> Type | None:
        return self._types.get(name)

    def names(self) -> list[str]:
        return sorted(self._types)

    def validate(self, context: Context) -> list[SchemaMismatch]:
        """Check every declared variable against ``context``.

        Returns:
            All mismatches, sorted by name; empty when the context satisfies
            the schema.
        """
        mismatches: list[SchemaMismatch] = []
        for name in sorted(self._types):
            expected = self._types[name]
            value = context.get(name)
            if value is None:
                mismatches.append(SchemaMismatch(name, expected, None))
                continue
            actual = value.concrete_type()
            if actual != expected:
                mismatches.append(SchemaMismatch(name, expected, actual))
        return mismatches

    def check(self, context: Context) -> None:
        """Like ``validate`` but raises ``SchemaMismatchError`` on failure."""
        mismatches = self.validate(context)
        if mismatches:
            raise SchemaMismatchError(tuple(mismatches))

    def is_valid(self, context: Context) -> bool:
        return not self.validate(context)

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContextSchema):
            return NotImplemented
        return dict(self._types) == dict(other._types)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        declared = {name: str(kind) for name, kind in self._types.items()}
        return f"ContextSchema({declared!r})"
