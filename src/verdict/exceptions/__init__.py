"""Verdict exception hierarchy.

Exceptions are organized into one module per layer. All of them can be
imported from this package:
    from verdict.exceptions import ParseError, EvaluationError, RunnerError
"""

from __future__ import annotations

from verdict.exceptions.base import VerdictError
from verdict.exceptions.config import ConfigError
from verdict.exceptions.context import ContextError, SchemaMismatchError
from verdict.exceptions.evaluation import (
    EvaluationError,
    ExpressionDepthError,
    MissingContextError,
    TypeMismatchError,
)
from verdict.exceptions.parse import (
    EmptyArrayError,
    InvalidInputError,
    InvalidNumberError,
    InvalidOpError,
    MixedArrayError,
    NestedArrayError,
    ParseError,
    ParseErrorKind,
    UnknownOpError,
)
from verdict.exceptions.runner import (
    RunnerContextError,
    RunnerError,
    RunnerEvaluationError,
)

__all__ = [
    # Base
    "VerdictError",
    # Configuration
    "ConfigError",
    # Context
    "ContextError",
    "SchemaMismatchError",
    # Evaluation
    "EvaluationError",
    "ExpressionDepthError",
    "MissingContextError",
    "TypeMismatchError",
    # Parsing
    "ParseError",
    "ParseErrorKind",
    "InvalidInputError",
    "InvalidNumberError",
    "EmptyArrayError",
    "MixedArrayError",
    "NestedArrayError",
    "InvalidOpError",
    "UnknownOpError",
    # Runner
    "RunnerError",
    "RunnerContextError",
    "RunnerEvaluationError",
]
