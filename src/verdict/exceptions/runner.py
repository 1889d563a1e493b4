from __future__ import annotations

from typing import TYPE_CHECKING

from verdict.exceptions.base import VerdictError
from verdict.exceptions.context import format_mismatches

if TYPE_CHECKING:
    from verdict.context import SchemaMismatch
    from verdict.exceptions.evaluation import EvaluationError


class RunnerError(VerdictError):
    """Base exception for errors surfaced by a Runner session."""


class RunnerContextError(RunnerError):
    """Raised when a context is rejected by the runner's schema.

    Attributes:
        mismatches: Every variable that failed validation.
    """

    def __init__(self, mismatches: tuple[SchemaMismatch, ...]) -> None:
        self.mismatches = mismatches
        super().__init__(
            f"Runner rejected context ({format_mismatches(mismatches)})"
        )


class RunnerEvaluationError(RunnerError):
    """Raised when an expression fails inside a runner.

    The original evaluation error is kept on ``error`` and chained as
    ``__cause__``.

    Attributes:
        error: The wrapped evaluation error.
    """

    def __init__(self, error: EvaluationError) -> None:
        self.error = error
        super().__init__(f"Expression failed: {error.message}")
