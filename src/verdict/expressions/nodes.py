"""Expression tree nodes and the construction API.

The node set is closed: ``Literal`` and ``Get`` are leaves, ``Eq`` and ``Gt``
compare two children. Nodes are frozen dataclasses, each composite owning
its children, so a tree is immutable once built and two trees compare equal
when they have the same structure.

Every node supports:
- ``eval(context)``: compute the node's value
- ``eval_type(context)``: compute the type ``eval`` would produce, without
  doing the node's own work
- ``context_dependencies()``: variable names the node itself reads
- ``name()`` / ``args()``: operator tag and ordered children
- ``to_json()``: ``{name: [args...]}``; literals encode as bare JSON

Example:
    >>> from verdict.context import Context
    >>> rule = eq(literal(1), get("userId"))
    >>> rule.eval(Context().set_int("userId", 1))
    Value(Bool, True)
    >>> serialize(rule)
    '{"eq":[1,{"get":["userId"]}]}'
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from verdict.constants import DEFAULT_MAX_EXPRESSION_DEPTH, OP_EQ, OP_GET, OP_GT
from verdict.exceptions.evaluation import ExpressionDepthError, MissingContextError
from verdict.expressions.type_check import check_args_share_type
from verdict.expressions.types import BOOL, Type, TypeKind
from verdict.expressions.values import Value

if TYPE_CHECKING:
    from verdict.context import Context

__all__ = [
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
    "expression_depth",
]


class Expression(ABC):
    """Base class of all expression nodes.

    Subclasses implement ``_eval``, ``_eval_type``, ``name`` and ``args``.
    The public ``eval``/``eval_type`` check the tree's depth once and then
    recurse through the private hooks.
    """

    __slots__ = ()

    def eval(
        self,
        context: Context,
        *,
        max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
    ) -> Value:
        """Evaluate this expression against ``context``.

        Args:
            context: Variables visible to ``get``.
            max_depth: Deepest tree accepted before any recursion happens.

        Returns:
            The resulting value.

        Raises:
            MissingContextError: If a ``get`` names an unset variable.
            ExpressionDepthError: If the tree is deeper than ``max_depth``.
        """
        _check_depth(self, max_depth)
        return self._eval(context)

    def eval_type(
        self,
        context: Context,
        *,
        max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
    ) -> Type:
        """Compute the type ``eval`` would return on the same context.

        Raises:
            MissingContextError: If a ``get`` names an unset variable.
            TypeMismatchError: If an operator's arguments disagree on type.
            ExpressionDepthError: If the tree is deeper than ``max_depth``.
        """
        _check_depth(self, max_depth)
        return self._eval_type(context)

    def context_dependencies(self) -> list[str] | None:
        """Variables this node reads itself; children are not included."""
        return None

    def to_json(self) -> Any:
        return {self.name(): [arg.to_json() for arg in self.args()]}

    @abstractmethod
    def name(self) -> str:
        """Stable operator tag, also used as the JSON key."""

    @abstractmethod
    def args(self) -> tuple[Expression, ...]:
        """Ordered child nodes."""

    @abstractmethod
    def _eval(self, context: Context) -> Value: ...

    @abstractmethod
    def _eval_type(self, context: Context) -> Type: ...


@dataclass(frozen=True, slots=True)
class Literal(Expression):
    """A constant value.

    Attributes:
        value: The value returned by ``eval``.
    """

    value: Value

    def name(self) -> str:
        return self.value.kind.value

    def args(self) -> tuple[Expression, ...]:
        return ()

    def to_json(self) -> Any:
        return self.value.to_json()

    def _eval(self, context: Context) -> Value:
        return self.value

    def _eval_type(self, context: Context) -> Type:
        return self.value.concrete_type()


@dataclass(frozen=True, slots=True)
class Get(Expression):
    """Look up a variable in the context.

    The variable name is also exposed as a single string-literal argument so
    that the default encoding yields ``{"get": ["name"]}``.

    Attributes:
        variable: Name of the context variable.
    """

    variable: str

    def name(self) -> str:
        return OP_GET

    def args(self) -> tuple[Expression, ...]:
        return (Literal(Value(TypeKind.STR, self.variable)),)

    def context_dependencies(self) -> list[str] | None:
        return [self.variable]

    def _lookup(self, context: Context) -> Value:
        value = context.get(self.variable)
        if value is None:
            raise MissingContextError(self.variable)
        return value

    def _eval(self, context: Context) -> Value:
        return self._lookup(context)

    def _eval_type(self, context: Context) -> Type:
        # Typed from the context's value, not from a schema
        return self._lookup(context).concrete_type()


@dataclass(frozen=True, slots=True)
class Eq(Expression):
    """True when both sides evaluate to the same value."""

    left: Expression
    right: Expression

    def name(self) -> str:
        return OP_EQ

    def args(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def _eval(self, context: Context) -> Value:
        left = self.left._eval(context)
        right = self.right._eval(context)
        return Value(TypeKind.BOOL, left == right)

    def _eval_type(self, context: Context) -> Type:
        check_args_share_type(self, context)
        return BOOL


@dataclass(frozen=True, slots=True)
class Gt(Expression):
    """True when the left side is strictly greater than the right side.

    Uses the total order documented in ``verdict.expressions.values``.
    """

    left: Expression
    right: Expression

    def name(self) -> str:
        return OP_GT

    def args(self) -> tuple[Expression, ...]:
        return (self.left, self.right)

    def _eval(self, context: Context) -> Value:
        left = self.left._eval(context)
        right = self.right._eval(context)
        return Value(TypeKind.BOOL, left > right)

    def _eval_type(self, context: Context) -> Type:
        check_args_share_type(self, context)
        return BOOL


# =============================================================================
# Construction API
# =============================================================================


def literal(content: Any) -> Literal:
    """Build a literal from a Value or a plain Python value.

    Accepts bool, int, float, str, or a non-empty homogeneous list/tuple
    of one of them.

    Raises:
        ValueError: If ``content`` cannot be represented as a Value.
    """
    if isinstance(content, Value):
        return Literal(content)
    return Literal(Value.from_python(content))


def get(name: str) -> Get:
    """Build a context lookup of ``name``."""
    if not isinstance(name, str):
        raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
    return Get(name)


def eq(left: Expression, right: Expression) -> Eq:
    """Build an equality comparison."""
    _require_expressions(OP_EQ, left, right)
    return Eq(left, right)


def gt(left: Expression, right: Expression) -> Gt:
    """Build a strict greater-than comparison."""
    _require_expressions(OP_GT, left, right)
    return Gt(left, right)


def _require_expressions(op: str, *args: Any) -> None:
    for position, arg in enumerate(args):
        if not isinstance(arg, Expression):
            raise TypeError(
                f"'{op}' argument {position} must be an Expression, "
                f"got {type(arg).__name__}"
            )


# =============================================================================
# Tree utilities
# =============================================================================


def serialize(expression: Expression) -> str:
    """Render ``expression.to_json()`` as compact JSON text.

    ``parse(serialize(tree))`` rebuilds a tree that serializes identically.
    """
    return json.dumps(expression.to_json(), separators=(",", ":"), ensure_ascii=False)


def expression_depth(expression: Expression) -> int:
    """Nesting depth of a tree; a lone literal has depth 1.

    Walks the tree iteratively so that arbitrarily deep trees can be
    measured before anything recurses into them.
    """
    deepest = 0
    stack: list[tuple[Expression, int]] = [(expression, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.args())
    return deepest


def collect_dependencies(expression: Expression) -> list[str]:
    """Every variable read anywhere in the tree.

    Names are returned in the order a left-to-right walk first meets them,
    without duplicates.
    """
    seen: dict[str, None] = {}
    stack: list[Expression] = [expression]
    while stack:
        node = stack.pop()
        for name in node.context_dependencies() or ():
            seen.setdefault(name, None)
        stack.extend(reversed(node.args()))
    return list(seen)


def _check_depth(expression: Expression, max_depth: int) -> None:
    depth = expression_depth(expression)
    if depth > max_depth:
        raise ExpressionDepthError(depth, max_depth)
