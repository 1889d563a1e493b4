from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from verdict.exceptions.base import VerdictError

if TYPE_CHECKING:
    from verdict.expressions.types import Type


class EvaluationError(VerdictError):
    """Base exception for failures evaluating or type-checking an expression."""


class MissingContextError(EvaluationError):
    """Raised when a ``get`` names a variable absent from the context.

    Attributes:
        name: The variable that could not be found.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Context variable '{name}' is not set")


class TypeMismatchError(EvaluationError):
    """Raised when an argument's type differs from the one required.

    Attributes:
        operator_json: JSON encoding of the operator whose check failed.
        position: 0-based index of the offending argument.
        expected: The type that was required.
        actual: The type that was found.
    """

    def __init__(
        self,
        operator_json: Any,
        position: int,
        expected: Type,
        actual: Type,
    ) -> None:
        self.operator_json = operator_json
        self.position = position
        self.expected = expected
        self.actual = actual
        rendered = json.dumps(operator_json, separators=(",", ":"), ensure_ascii=False)
        super().__init__(
            f"Type mismatch in {rendered}: argument {position} "
            f"expected {expected}, got {actual}"
        )


class ExpressionDepthError(EvaluationError):
    """Raised when an expression tree is nested deeper than allowed.

    Attributes:
        depth: Nesting depth of the rejected tree.
        limit: Maximum depth that was in force.
    """

    def __init__(self, depth: int, limit: int) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(f"Expression depth {depth} exceeds the limit of {limit}")
