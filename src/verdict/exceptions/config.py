from __future__ import annotations

from typing import Any

from verdict.exceptions.base import VerdictError


class ConfigError(VerdictError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when configuration cannot be loaded, parsed, or validated. This
    includes YAML parsing failures, Pydantic validation errors, and type
    strings in the ``variables`` table that do not name a known type.

    Attributes:
        message: Human-readable error message describing the issue.
        field: Optional field name that caused the error.
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Unknown type 'Integer'",
            field="variables.user_id",
            value="Integer",
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
