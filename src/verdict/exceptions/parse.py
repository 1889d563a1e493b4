from __future__ import annotations

from enum import Enum

from verdict.exceptions.base import VerdictError


class ParseErrorKind(str, Enum):
    """Category of a parse failure."""

    INVALID_INPUT = "invalid_input"  # malformed JSON text
    INVALID_NUMBER = "invalid_number"  # number not exactly representable
    EMPTY_ARRAY = "empty_array"
    MIXED_ARRAY = "mixed_array"
    NESTED_ARRAY = "nested_array"
    INVALID_OP = "invalid_op"  # wrong key count or argument shape
    UNKNOWN_OP = "unknown_op"


class ParseError(VerdictError):
    """Base exception for failures turning JSON text into an expression.

    Attributes:
        message: Human-readable error message.
        kind: Category of the failure.
        description: Detail about the offending input, if any.
    """

    kind: ParseErrorKind = ParseErrorKind.INVALID_INPUT

    def __init__(self, message: str, description: str | None = None) -> None:
        """Initialize the ParseError.

        Args:
            message: Human-readable error message.
            description: Optional detail (e.g. the underlying decoder error).
        """
        self.description = description
        if description:
            message = f"{message}: {description}"
        super().__init__(message)


class InvalidInputError(ParseError):
    """Raised when the input is not well-formed JSON."""

    kind = ParseErrorKind.INVALID_INPUT


class InvalidNumberError(ParseError):
    """Raised for a number that is neither a 64-bit int nor a finite double."""

    kind = ParseErrorKind.INVALID_NUMBER


class EmptyArrayError(ParseError):
    """Raised for ``[]``; the element type of an empty array is unknown."""

    kind = ParseErrorKind.EMPTY_ARRAY

    def __init__(self, description: str | None = None) -> None:
        super().__init__("Array literals must not be empty", description)


class MixedArrayError(ParseError):
    """Raised when array elements are not all of the first element's kind."""

    kind = ParseErrorKind.MIXED_ARRAY

    def __init__(self, description: str | None = None) -> None:
        super().__init__("Array literal mixes element kinds", description)


class NestedArrayError(ParseError):
    """Raised when an array literal holds arrays or objects."""

    kind = ParseErrorKind.NESTED_ARRAY

    def __init__(self, description: str | None = None) -> None:
        super().__init__("Array literals cannot be nested", description)


class InvalidOpError(ParseError):
    """Raised for an operator object with the wrong shape."""

    kind = ParseErrorKind.INVALID_OP


class UnknownOpError(ParseError):
    """Raised for an operator object whose key names no known operator."""

    kind = ParseErrorKind.UNKNOWN_OP

    def __init__(self, op_name: str) -> None:
        self.op_name = op_name
        super().__init__(f"Unknown operator '{op_name}'")
