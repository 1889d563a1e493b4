"""Verdict: an embeddable, strongly-typed predicate language.

Rules are JSON documents such as ``{"eq": [1, {"get": ["userId"]}]}``,
parsed into immutable expression trees and evaluated against a named
variable context that has been validated against a declared schema.

Usage:
    from verdict import Context, ContextSchema, INT, Runner, parse

    schema = ContextSchema().declare("userId", INT)
    runner = Runner(schema, Context().set_int("userId", 1))
    runner.eval(parse('{"eq": [1, {"get": ["userId"]}]}'))  # Value(Bool, True)
"""

from __future__ import annotations

from verdict.config import VerdictConfig, load_config
from verdict.context import Context, ContextSchema, SchemaMismatch
from verdict.exceptions import (
    ConfigError,
    EvaluationError,
    MissingContextError,
    ParseError,
    RunnerContextError,
    RunnerError,
    RunnerEvaluationError,
    SchemaMismatchError,
    TypeMismatchError,
    VerdictError,
)
from verdict.expressions import (
    BOOL,
    FLOAT,
    INT,
    STR,
    Eq,
    Expression,
    Get,
    Gt,
    Literal,
    Type,
    TypeKind,
    Value,
    collect_dependencies,
    eq,
    get,
    gt,
    literal,
    serialize,
)
from verdict.parser import parse, parse_value
from verdict.runner import Runner

__version__ = "0.1.0"

__all__: list[str] = [
    "__version__",
    # Types and values
    "Type",
    "TypeKind",
    "BOOL",
    "INT",
    "FLOAT",
    "STR",
    "Value",
    # Expressions
    "Expression",
    "Literal",
    "Get",
    "Eq",
    "Gt",
    "literal",
    "get",
    "eq",
    "gt",
    "serialize",
    "collect_dependencies",
    # Context
    "Context",
    "ContextSchema",
    "SchemaMismatch",
    # Parsing
    "parse",
    "parse_value",
    # Sessions
    "Runner",
    # Configuration
    "VerdictConfig",
    "load_config",
    # Errors
    "VerdictError",
    "ParseError",
    "EvaluationError",
    "MissingContextError",
    "TypeMismatchError",
    "SchemaMismatchError",
    "RunnerError",
    "RunnerContextError",
    "RunnerEvaluationError",
    "ConfigError",
]
