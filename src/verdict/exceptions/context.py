from __future__ import annotations

from typing import TYPE_CHECKING

from verdict.exceptions.base import VerdictError

if TYPE_CHECKING:
    from verdict.context import SchemaMismatch


def format_mismatches(mismatches: tuple[SchemaMismatch, ...]) -> str:
    """Render schema mismatches as ``name: expected X, got Y`` fragments."""
    parts = []
    for mismatch in mismatches:
        actual = "nothing" if mismatch.actual is None else str(mismatch.actual)
        parts.append(f"{mismatch.name}: expected {mismatch.expected}, got {actual}")
    return "; ".join(parts)


class ContextError(VerdictError):
    """Base exception for context and schema failures."""


class SchemaMismatchError(ContextError):
    """Raised when a context does not satisfy a schema.

    Every mismatching variable is reported, not just the first.

    Attributes:
        mismatches: One entry per declared variable that failed validation.
    """

    def __init__(self, mismatches: tuple[SchemaMismatch, ...]) -> None:
        self.mismatches = mismatches
        super().__init__(
            f"Context does not match schema ({format_mismatches(mismatches)})"
        )
