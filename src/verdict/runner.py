"""Validated evaluation sessions.

A ``Runner`` binds one ``ContextSchema`` to one ``Context``. Construction
validates the context and fails if any declared variable is missing or has
the wrong type, so a Runner that exists is always ready. It then evaluates
any number of expressions against that context.

Errors from lower layers are re-raised in the runner's own taxonomy:
- schema mismatches become ``RunnerContextError`` (all mismatches listed)
- evaluation failures become ``RunnerEvaluationError`` with the original
  error on ``.error`` and as ``__cause__``

Example:
    >>> from verdict.expressions import INT, eq, get, literal
    >>> schema = ContextSchema().declare("userId", INT)
    >>> runner = Runner(schema, Context().set_int("userId", 1))
    >>> runner.eval(eq(literal(1), get("userId")))
    Value(Bool, True)
"""

from __future__ import annotations

from verdict.config import VerdictConfig
from verdict.constants import DEFAULT_MAX_EXPRESSION_DEPTH
from verdict.context import Context, ContextSchema
from verdict.exceptions.context import SchemaMismatchError
from verdict.exceptions.evaluation import EvaluationError
from verdict.exceptions.runner import RunnerContextError, RunnerEvaluationError
from verdict.expressions.nodes import Expression
from verdict.expressions.types import Type
from verdict.expressions.values import Value
from verdict.logging import get_logger

__all__ = ["Runner"]

logger = get_logger(__name__)


class Runner:
    """Evaluation session over one validated context.

    Attributes:
        schema: The schema every context of this runner must satisfy.
        context: The validated context expressions are evaluated against.
        max_depth: Deepest expression tree accepted.
    """

    __slots__ = ("_schema", "_context", "_max_depth")

    def __init__(
        self,
        schema: ContextSchema,
        context: Context,
        *,
        config: VerdictConfig | None = None,
    ) -> None:
        """Validate ``context`` against ``schema`` and bind them.

        Args:
            schema: Declared variable types.
            context: Variables to evaluate against.
            config: Optional settings; supplies ``max_expression_depth``.

        Raises:
            RunnerContextError: If the context does not satisfy the schema.
        """
        _validate(schema, context)
        self._schema = schema
        self._context = context
        self._max_depth = (
            config.max_expression_depth if config else DEFAULT_MAX_EXPRESSION_DEPTH
        )
        logger.debug(
            "runner_ready",
            variables=context.names(),
            declared=schema.names(),
        )

    @classmethod
    def new(
        cls,
        schema: ContextSchema,
        context: Context,
        *,
        config: VerdictConfig | None = None,
    ) -> Runner:
        return cls(schema, context, config=config)

    @property
    def schema(self) -> ContextSchema:
        return self._schema

    @property
    def context(self) -> Context:
        return self._context

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def eval(self, expression: Expression) -> Value:
        """Evaluate ``expression`` against the held context.

        Raises:
            RunnerEvaluationError: Wrapping the underlying evaluation error.
        """
        try:
            value = expression.eval(self._context, max_depth=self._max_depth)
        except EvaluationError as e:
            logger.debug("expression_evaluation_failed", error=e.message)
            raise RunnerEvaluationError(e) from e
        logger.debug(
            "expression_evaluated", op=expression.name(), result=value.to_json()
        )
        return value

    def eval_type(self, expression: Expression) -> Type:
        """Type-check ``expression`` against the held context.

        Raises:
            RunnerEvaluationError: Wrapping the underlying evaluation error.
        """
        try:
            return expression.eval_type(self._context, max_depth=self._max_depth)
        except EvaluationError as e:
            logger.debug("expression_type_check_failed", error=e.message)
            raise RunnerEvaluationError(e) from e

    def update_context(self, candidate: Context) -> None:
        """Check ``candidate`` against this runner's schema.

        This is a dry run: the runner keeps evaluating against its original
        context whether or not the check passes. Use ``with_context`` to get
        a runner bound to the candidate.

        Raises:
            RunnerContextError: If the candidate does not satisfy the schema.
        """
        _validate(self._schema, candidate)
        logger.debug("context_update_checked", variables=candidate.names())

    def with_context(self, candidate: Context) -> Runner:
        """Return a new runner over ``candidate`` with the same schema and limits.

        Raises:
            RunnerContextError: If the candidate does not satisfy the schema.
        """
        runner = Runner(self._schema, candidate)
        runner._max_depth = self._max_depth
        return runner

    def __repr__(self) -> str:
        return f"Runner(schema={self._schema!r}, context={self._context!r})"


def _validate(schema: ContextSchema, context: Context) -> None:
    try:
        schema.check(context)
    except SchemaMismatchError as e:
        logger.debug(
            "runner_rejected_context",
            mismatches=[
                (m.name, str(m.expected), None if m.actual is None else str(m.actual))
                for m in e.mismatches
            ],
        )
        raise RunnerContextError(e.mismatches) from e
