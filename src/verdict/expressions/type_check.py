"""Type-checking rule shared by the comparison operators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from verdict.exceptions.evaluation import TypeMismatchError

if TYPE_CHECKING:
    from verdict.context import Context
    from verdict.expressions.nodes import Expression
    from verdict.expressions.types import Type

__all__ = ["check_args_share_type"]


def check_args_share_type(operator: Expression, context: Context) -> Type | None:
    """Require every argument of ``operator`` to have the same type.

    The first argument's type is the baseline. Later arguments are typed in
    order, and checking stops at the first one that differs. An operator
    without arguments has no constraint.

    Args:
        operator: The operator whose ``args()`` are checked.
        context: Context used to type ``get`` lookups.

    Returns:
        The shared type, or None when there are no arguments.

    Raises:
        TypeMismatchError: On the first argument whose type differs from the
            baseline, reporting its position, the baseline and its own type.
        EvaluationError: If typing any argument fails.
    """
    args = operator.args()
    if not args:
        return None

    expected = args[0]._eval_type(context)
    for position, arg in enumerate(args[1:], start=1):
        actual = arg._eval_type(context)
        if actual != expected:
            raise TypeMismatchError(
                operator_json=operator.to_json(),
                position=position,
                expected=expected,
                actual=actual,
            )
    return expected
