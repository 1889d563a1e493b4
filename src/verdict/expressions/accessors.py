"""Evaluators that insist on one concrete result kind.

Each helper evaluates an expression and hands back plain Python content,
raising ``TypeMismatchError`` (argument position 0, the expression itself
as the operator) when the value has another kind or, for arrays, another
length.

Example:
    >>> from verdict.context import Context
    >>> from verdict.expressions.nodes import eq, literal
    >>> eval_bool(eq(literal(1), literal(1)), Context())
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from verdict.constants import DEFAULT_MAX_EXPRESSION_DEPTH
from verdict.exceptions.evaluation import TypeMismatchError
from verdict.expressions.nodes import Expression
from verdict.expressions.types import BOOL, FLOAT, INT, STR, Type, TypeKind
from verdict.expressions.values import Value

if TYPE_CHECKING:
    from verdict.context import Context

__all__ = [
    "eval_bool",
    "eval_int",
    "eval_float",
    "eval_str",
    "eval_bool_array",
    "eval_int_array",
    "eval_float_array",
    "eval_str_array",
]

T = TypeVar("T")


def _expect(
    expression: Expression,
    context: Context,
    expected: Type,
    narrow: Callable[[Value], T | None],
    max_depth: int,
) -> T:
    value = expression.eval(context, max_depth=max_depth)
    content = narrow(value)
    if content is None:
        raise TypeMismatchError(
            operator_json=expression.to_json(),
            position=0,
            expected=expected,
            actual=value.concrete_type(),
        )
    return content


def eval_bool(
    expression: Expression,
    context: Context,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> bool:
    """Evaluate to a ``bool`` or raise ``TypeMismatchError``."""
    return _expect(expression, context, BOOL, Value.as_bool, max_depth)


def eval_int(
    expression: Expression,
    context: Context,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> int:
    return _expect(expression, context, INT, Value.as_int, max_depth)


def eval_float(
    expression: Expression,
    context: Context,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> float:
    return _expect(expression, context, FLOAT, Value.as_float, max_depth)


def eval_str(
    expression: Expression,
    context: Context,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> str:
    return _expect(expression, context, STR, Value.as_str, max_depth)


def eval_bool_array(
    expression: Expression,
    context: Context,
    length: int,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> tuple[bool, ...]:
    """Evaluate to a bool array of exactly ``length`` elements."""
    return _expect(
        expression,
        context,
        Type.array(TypeKind.BOOL, length),
        lambda value: value.as_bool_array(length),
        max_depth,
    )


def eval_int_array(
    expression: Expression,
    context: Context,
    length: int,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> tuple[int, ...]:
    return _expect(
        expression,
        context,
        Type.array(TypeKind.INT, length),
        lambda value: value.as_int_array(length),
        max_depth,
    )


def eval_float_array(
    expression: Expression,
    context: Context,
    length: int,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> tuple[float, ...]:
    return _expect(
        expression,
        context,
        Type.array(TypeKind.FLOAT, length),
        lambda value: value.as_float_array(length),
        max_depth,
    )


def eval_str_array(
    expression: Expression,
    context: Context,
    length: int,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> tuple[str, ...]:
    return _expect(
        expression,
        context,
        Type.array(TypeKind.STR, length),
        lambda value: value.as_str_array(length),
        max_depth,
    )
