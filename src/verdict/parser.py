"""JSON text to expression trees.

Grammar
-------
- ``true`` / ``false``: Bool literal
- a number: Int literal when it fits a signed 64-bit integer, otherwise a
  Float literal when it is exactly representable as a finite double;
  anything else is rejected with ``InvalidNumberError``
- a string: Str literal
- a non-empty array of booleans, integers, floats or strings: the matching
  array literal; every element must share the first element's kind.
  Integer elements follow the number rule above, so ``[9223372036854775808]``
  is a FloatArray, while an array whose integers land on both sides of the
  Int range is a ``MixedArrayError``
- ``{"get": ["name"]}``: context lookup
- ``{"eq": [a, b]}`` / ``{"gt": [a, b]}``: comparisons; ``a`` and ``b`` are
  parsed recursively

Integers and floats are told apart by their JSON spelling, so ``1`` is an
Int and ``1.0`` is a Float.

Serializing a parsed tree with ``verdict.expressions.serialize`` and parsing
it again reproduces the same text.

Example:
    >>> tree = parse('{"eq":[1,{"get":["userId"]}]}')
    >>> tree
    Eq(left=Literal(value=Value(Int, 1)), right=Get(variable='userId'))
"""

from __future__ import annotations

import json
import math
from typing import Any, NoReturn

from verdict.constants import (
    DEFAULT_MAX_EXPRESSION_DEPTH,
    INT_MAX,
    INT_MIN,
    OP_EQ,
    OP_GET,
    OP_GT,
)
from verdict.exceptions.parse import (
    EmptyArrayError,
    InvalidInputError,
    InvalidNumberError,
    InvalidOpError,
    MixedArrayError,
    NestedArrayError,
    UnknownOpError,
)
from verdict.expressions.nodes import Eq, Expression, Get, Gt, Literal
from verdict.expressions.types import TypeKind
from verdict.expressions.values import Value
from verdict.logging import get_logger

__all__ = ["parse", "parse_value"]

logger = get_logger(__name__)

_BINARY_OPERATORS: dict[str, type[Eq] | type[Gt]] = {
    OP_EQ: Eq,
    OP_GT: Gt,
}


def parse(
    text: str | bytes,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> Expression:
    """Parse JSON text into an expression tree.

    Args:
        text: UTF-8 JSON text.
        max_depth: Deepest tree accepted.

    Returns:
        The root of the parsed tree.

    Raises:
        InvalidInputError: If the text is not JSON, contains ``null``, or
            nests deeper than ``max_depth``.
        InvalidNumberError: For numbers that fit neither Int nor Float.
        EmptyArrayError, MixedArrayError, NestedArrayError: For malformed
            array literals.
        InvalidOpError: For operator objects of the wrong shape.
        UnknownOpError: For operator objects naming no known operator.
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise InvalidInputError(
            "Expression text must be str or bytes",
            f"got {type(text).__name__}",
        )
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise InvalidInputError("Malformed JSON", str(e)) from e
    except UnicodeDecodeError as e:
        raise InvalidInputError("Expression text is not valid UTF-8", str(e)) from e
    except ValueError as e:
        # int literals past the interpreter's digit limit
        raise InvalidNumberError("Number out of range", str(e)) from e
    except RecursionError as e:
        raise InvalidInputError("JSON document is nested too deeply") from e

    expression = parse_value(document, max_depth=max_depth)
    logger.debug("expression_parsed", op=expression.name())
    return expression


def parse_value(
    document: Any,
    *,
    max_depth: int = DEFAULT_MAX_EXPRESSION_DEPTH,
) -> Expression:
    """Build an expression from an already-decoded JSON document.

    Useful when rules are embedded in a larger JSON or YAML file. Accepts
    the same shapes and raises the same errors as ``parse``.
    """
    return _parse_node(document, 1, max_depth)


def _reject_constant(name: str) -> NoReturn:
    raise InvalidNumberError("Non-finite number", name)


def _check_depth(depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise InvalidInputError(
            "Expression nesting too deep", f"limit is {max_depth}"
        )


def _parse_node(node: Any, depth: int, max_depth: int) -> Expression:
    _check_depth(depth, max_depth)
    # bool before int: bool is a subclass of int
    if isinstance(node, bool):
        return Literal(Value(TypeKind.BOOL, node))
    if isinstance(node, int):
        return Literal(_number_from_int(node))
    if isinstance(node, float):
        return Literal(Value(TypeKind.FLOAT, _finite_float(node)))
    if isinstance(node, str):
        return Literal(Value(TypeKind.STR, node))
    if isinstance(node, list):
        return Literal(_parse_array(node))
    if isinstance(node, dict):
        return _parse_object(node, depth, max_depth)
    if node is None:
        raise InvalidInputError("null is not a valid expression")
    raise InvalidInputError(
        "Unsupported JSON value", f"{type(node).__name__}: {node!r}"
    )


def _number_from_int(number: int) -> Value:
    if INT_MIN <= number <= INT_MAX:
        return Value(TypeKind.INT, number)
    try:
        as_float = float(number)
    except OverflowError as e:
        raise InvalidNumberError("Number out of range", str(number)) from e
    if int(as_float) != number:
        raise InvalidNumberError("Number not exactly representable", str(number))
    return Value(TypeKind.FLOAT, as_float)


def _finite_float(number: float) -> float:
    if not math.isfinite(number):
        raise InvalidNumberError("Number out of range", repr(number))
    return number


def _element_kind(item: Any) -> TypeKind | None:
    if isinstance(item, bool):
        return TypeKind.BOOL
    if isinstance(item, int):
        return TypeKind.INT
    if isinstance(item, float):
        return TypeKind.FLOAT
    if isinstance(item, str):
        return TypeKind.STR
    return None


def _parse_array(items: list[Any]) -> Value:
    if not items:
        raise EmptyArrayError()

    element = _element_kind(items[0])
    if element is None:
        raise NestedArrayError(f"first element is {_json_kind(items[0])}")

    for position, item in enumerate(items[1:], start=1):
        if _element_kind(item) is not element:
            raise MixedArrayError(
                f"element {position} is {_json_kind(item)}, "
                f"expected {element.display_name}"
            )

    if element is TypeKind.INT:
        return _parse_int_array(items)
    if element is TypeKind.FLOAT:
        for item in items:
            _finite_float(item)

    return Value(element.array_of(), items)


def _parse_int_array(items: list[Any]) -> Value:
    # Each integer is classified like a bare number; the results must agree
    numbers = [_number_from_int(item) for item in items]
    kind = numbers[0].kind
    for position, number in enumerate(numbers[1:], start=1):
        if number.kind is not kind:
            raise MixedArrayError(
                f"element {position} is {number.kind.display_name}, "
                f"expected {kind.display_name}"
            )
    return Value(kind.array_of(), [number.content for number in numbers])


def _parse_object(node: dict[str, Any], depth: int, max_depth: int) -> Expression:
    if len(node) != 1:
        _invalid_op(f"operator objects need exactly one key, got {len(node)}")

    op_name, args = next(iter(node.items()))

    if op_name == OP_GET:
        if not (isinstance(args, list) and len(args) == 1 and isinstance(args[0], str)):
            _invalid_op(
                f"'{OP_GET}' takes a list of one string, got {json.dumps(args)}"
            )
        _check_depth(depth + 1, max_depth)
        return Get(args[0])

    operator = _BINARY_OPERATORS.get(op_name)
    if operator is None:
        raise UnknownOpError(op_name)
    if not (isinstance(args, list) and len(args) == 2):
        _invalid_op(
            f"'{op_name}' takes a list of two arguments, got {json.dumps(args)}"
        )
    left = _parse_node(args[0], depth + 1, max_depth)
    right = _parse_node(args[1], depth + 1, max_depth)
    return operator(left, right)


def _invalid_op(description: str) -> NoReturn:
    raise InvalidOpError("Invalid operator", description)


def _json_kind(item: Any) -> str:
    if isinstance(item, list):
        return "an array"
    if isinstance(item, dict):
        return "an object"
    if item is None:
        return "null"
    return type(item).__name__
