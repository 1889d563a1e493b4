"""Static types of Verdict values.

A ``Type`` is one of eight shapes. Array types carry their exact length, so
``IntArray(2)`` and ``IntArray(3)`` are different types. Equality is
structural: two types are equal when kind and length both match.

Types render as ``Bool``, ``Int``, ``Float``, ``Str`` and ``BoolArray(n)``,
``IntArray(n)``, ``FloatArray(n)``, ``StrArray(n)``; ``Type.parse`` reads the
same form back, which is how schemas are declared in configuration files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "TypeKind",
    "Type",
    "BOOL",
    "INT",
    "FLOAT",
    "STR",
]


class TypeKind(str, Enum):
    """Kind of a value, scalar or array.

    Declaration order defines the cross-kind rank used by the total order
    on values.
    """

    BOOL = "bool"
    BOOL_ARRAY = "boolArray"
    INT = "int"
    INT_ARRAY = "intArray"
    FLOAT = "float"
    FLOAT_ARRAY = "floatArray"
    STR = "str"
    STR_ARRAY = "strArray"

    @property
    def is_array(self) -> bool:
        return self in _ARRAY_TO_ELEMENT

    @property
    def element(self) -> TypeKind:
        """Element kind of an array kind; a scalar kind is its own element."""
        return _ARRAY_TO_ELEMENT.get(self, self)

    def array_of(self) -> TypeKind:
        """Array kind whose elements are of this scalar kind."""
        return _ELEMENT_TO_ARRAY[self]

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_ARRAY_TO_ELEMENT: dict[TypeKind, TypeKind] = {
    TypeKind.BOOL_ARRAY: TypeKind.BOOL,
    TypeKind.INT_ARRAY: TypeKind.INT,
    TypeKind.FLOAT_ARRAY: TypeKind.FLOAT,
    TypeKind.STR_ARRAY: TypeKind.STR,
}
_ELEMENT_TO_ARRAY: dict[TypeKind, TypeKind] = {
    element: array for array, element in _ARRAY_TO_ELEMENT.items()
}
_RANKS: dict[TypeKind, int] = {kind: index for index, kind in enumerate(TypeKind)}
_DISPLAY_NAMES: dict[TypeKind, str] = {
    TypeKind.BOOL: "Bool",
    TypeKind.BOOL_ARRAY: "BoolArray",
    TypeKind.INT: "Int",
    TypeKind.INT_ARRAY: "IntArray",
    TypeKind.FLOAT: "Float",
    TypeKind.FLOAT_ARRAY: "FloatArray",
    TypeKind.STR: "Str",
    TypeKind.STR_ARRAY: "StrArray",
}
_KINDS_BY_DISPLAY_NAME: dict[str, TypeKind] = {
    name: kind for kind, name in _DISPLAY_NAMES.items()
}

_TYPE_PATTERN = re.compile(r"^\s*([A-Za-z]+)\s*(?:\(\s*(\d+)\s*\))?\s*$")


@dataclass(frozen=True, slots=True)
class Type:
    """Static type of a value.

    Attributes:
        kind: The value kind.
        length: Exact element count for array kinds, None for scalars.

    Examples:
        >>> Type(TypeKind.INT)
        Type(Int)
        >>> Type.array(TypeKind.STR, 2) == Type(TypeKind.STR_ARRAY, 2)
        True
    """

    kind: TypeKind
    length: int | None = None

    def __post_init__(self) -> None:
        if self.kind.is_array:
            if self.length is None or self.length < 0:
                raise ValueError(
                    f"{self.kind.display_name} requires a non-negative length, "
                    f"got {self.length}"
                )
        elif self.length is not None:
            raise ValueError(f"{self.kind.display_name} does not take a length")

    @classmethod
    def array(cls, element: TypeKind, length: int) -> Type:
        """Build the array type of ``length`` elements of scalar ``element``."""
        return cls(element.array_of(), length)

    @classmethod
    def parse(cls, text: str) -> Type:
        """Read a type from its textual form (``Int``, ``IntArray(3)``).

        Raises:
            ValueError: If ``text`` does not name a type.
        """
        match = _TYPE_PATTERN.match(text)
        if match is None or match.group(1) not in _KINDS_BY_DISPLAY_NAME:
            raise ValueError(f"Unknown type '{text}'")
        kind = _KINDS_BY_DISPLAY_NAME[match.group(1)]
        length = match.group(2)
        if kind.is_array and length is None:
            raise ValueError(f"Array type '{text}' is missing its length")
        return cls(kind, int(length) if length is not None else None)

    @property
    def is_array(self) -> bool:
        return self.kind.is_array

    def __str__(self) -> str:
        if self.length is None:
            return self.kind.display_name
        return f"{self.kind.display_name}({self.length})"

    def __repr__(self) -> str:
        return f"Type({self})"


BOOL = Type(TypeKind.BOOL)
INT = Type(TypeKind.INT)
FLOAT = Type(TypeKind.FLOAT)
STR = Type(TypeKind.STR)
