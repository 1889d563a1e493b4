"""Runtime values of the Verdict expression language.

A ``Value`` pairs a ``TypeKind`` with its content: ``bool``, ``int``
(signed 64-bit), ``float``, ``str``, or a tuple of one of those for the
array kinds. Values are immutable, hashable and compare by value.

Ordering
--------
Values carry a total order, which the ``gt`` operator relies on:

- Bool: ``False < True``
- Int, Float: numeric order
- Str: lexicographic by Unicode code point
- Arrays: element-wise lexicographic; the first differing element decides,
  and a strict prefix sorts first
- Different kinds: ordered by the declaration order of ``TypeKind``

Type checking keeps operands of ``gt`` to a single type, so the cross-kind
rule only matters to callers comparing values directly.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from verdict.constants import INT_MAX, INT_MIN
from verdict.expressions.types import Type, TypeKind

__all__ = ["Scalar", "Content", "Value"]

Scalar = Union[bool, int, float, str]
Content = Union[
    Scalar,
    tuple[bool, ...],
    tuple[int, ...],
    tuple[float, ...],
    tuple[str, ...],
]


def _coerce_scalar(kind: TypeKind, item: Any) -> Scalar:
    """Check ``item`` against a scalar kind, returning the stored form."""
    if kind is TypeKind.BOOL:
        if isinstance(item, bool):
            return item
    elif kind is TypeKind.INT:
        if isinstance(item, int) and not isinstance(item, bool):
            if not INT_MIN <= item <= INT_MAX:
                raise ValueError(f"Int value {item} is outside the 64-bit range")
            return item
    elif kind is TypeKind.FLOAT:
        if isinstance(item, (int, float)) and not isinstance(item, bool):
            try:
                number = float(item)
            except OverflowError as e:
                raise ValueError(f"Float value {item} is out of range") from e
            if not math.isfinite(number):
                raise ValueError(f"Float value must be finite, got {number!r}")
            return number
    elif kind is TypeKind.STR:
        if isinstance(item, str):
            return item
    raise ValueError(
        f"{kind.display_name} value expected, got {type(item).__name__}: {item!r}"
    )


def _kind_of_scalar(item: Any) -> TypeKind | None:
    # bool first: bool is a subclass of int
    if isinstance(item, bool):
        return TypeKind.BOOL
    if isinstance(item, int):
        return TypeKind.INT
    if isinstance(item, float):
        return TypeKind.FLOAT
    if isinstance(item, str):
        return TypeKind.STR
    return None


@dataclass(frozen=True, slots=True, order=False)
class Value:
    """A typed runtime value.

    Content is validated and normalized on construction: array content is
    stored as a tuple and Float accepts ints (stored as ``float``). ``bool``
    is never accepted where an Int or Float is expected, and Float content
    must be finite.

    Attributes:
        kind: The value kind.
        content: The Python payload.

    Raises:
        ValueError: If ``content`` does not fit ``kind``.

    Examples:
        >>> Value(TypeKind.INT_ARRAY, [1, 2]).concrete_type()
        Type(IntArray(2))
        >>> Value(TypeKind.STR, "b") > Value(TypeKind.STR, "a")
        True
    """

    kind: TypeKind
    content: Content

    def __post_init__(self) -> None:
        if self.kind.is_array:
            if isinstance(self.content, (str, bytes)) or not isinstance(
                self.content, Sequence
            ):
                raise ValueError(
                    f"{self.kind.display_name} value expects a sequence, "
                    f"got {type(self.content).__name__}"
                )
            element = self.kind.element
            items = tuple(_coerce_scalar(element, item) for item in self.content)
            object.__setattr__(self, "content", items)
        else:
            object.__setattr__(self, "content", _coerce_scalar(self.kind, self.content))

    @classmethod
    def from_python(cls, obj: Any) -> Value:
        """Infer a value from a plain Python object.

        Accepts bool, int, float, str, or a non-empty list/tuple whose
        elements all share one of those kinds.

        Raises:
            ValueError: For empty or mixed sequences and unsupported types.
        """
        kind = _kind_of_scalar(obj)
        if kind is not None:
            return cls(kind, obj)
        if isinstance(obj, (list, tuple)):
            if not obj:
                raise ValueError("Cannot infer the element type of an empty array")
            element = _kind_of_scalar(obj[0])
            if element is None:
                raise ValueError(
                    f"Unsupported array element {type(obj[0]).__name__}: {obj[0]!r}"
                )
            for item in obj[1:]:
                if _kind_of_scalar(item) is not element:
                    raise ValueError(f"Array mixes element kinds: {list(obj)!r}")
            return cls(element.array_of(), obj)
        raise ValueError(f"Unsupported value {type(obj).__name__}: {obj!r}")

    def concrete_type(self) -> Type:
        """Return the static type of this value."""
        if self.kind.is_array:
            return Type(self.kind, len(self._items()))
        return Type(self.kind)

    def to_json(self) -> Any:
        """Return the JSON-compatible form (scalar or list)."""
        if self.kind.is_array:
            return list(self._items())
        return self.content

    def _items(self) -> tuple[Any, ...]:
        assert isinstance(self.content, tuple)
        return self.content

    def _narrow(self, kind: TypeKind, length: int | None = None) -> Any:
        if self.kind is not kind:
            return None
        if length is not None and len(self._items()) != length:
            return None
        return self.content

    # -------------------------------------------------------------------------
    # Accessors: content if this is exactly the requested kind, else None
    # -------------------------------------------------------------------------

    def as_bool(self) -> bool | None:
        return self._narrow(TypeKind.BOOL)  # type: ignore[no-any-return]

    def as_int(self) -> int | None:
        return self._narrow(TypeKind.INT)  # type: ignore[no-any-return]

    def as_float(self) -> float | None:
        return self._narrow(TypeKind.FLOAT)  # type: ignore[no-any-return]

    def as_str(self) -> str | None:
        return self._narrow(TypeKind.STR)  # type: ignore[no-any-return]

    def as_bool_array(self, length: int) -> tuple[bool, ...] | None:
        return self._narrow(TypeKind.BOOL_ARRAY, length)  # type: ignore[no-any-return]

    def as_int_array(self, length: int) -> tuple[int, ...] | None:
        return self._narrow(TypeKind.INT_ARRAY, length)  # type: ignore[no-any-return]

    def as_float_array(self, length: int) -> tuple[float, ...] | None:
        return self._narrow(TypeKind.FLOAT_ARRAY, length)  # type: ignore[no-any-return]

    def as_str_array(self, length: int) -> tuple[str, ...] | None:
        return self._narrow(TypeKind.STR_ARRAY, length)  # type: ignore[no-any-return]

    # -------------------------------------------------------------------------
    # Total order
    # -------------------------------------------------------------------------

    def _order_key(self, other: Value) -> tuple[Any, Any]:
        if self.kind is not other.kind:
            return self.kind.rank, other.kind.rank
        return self.content, other.content

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        mine, theirs = self._order_key(other)
        return bool(mine < theirs)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        mine, theirs = self._order_key(other)
        return bool(mine <= theirs)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        mine, theirs = self._order_key(other)
        return bool(mine > theirs)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        mine, theirs = self._order_key(other)
        return bool(mine >= theirs)

    def __repr__(self) -> str:
        return f"Value({self.concrete_type()}, {self.to_json()!r})"
