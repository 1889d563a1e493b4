"""Typed expression trees for Verdict.

Module Structure
----------------
- types.py: ``Type`` and ``TypeKind``, the static types
- values.py: ``Value``, runtime values and their total order
- nodes.py: ``Literal``/``Get``/``Eq``/``Gt`` and the construction API
- type_check.py: the rule shared by comparison operators
- accessors.py: evaluators that insist on one result kind

Expression trees are immutable, so one tree can be evaluated from any
number of threads against different contexts.
"""

from __future__ import annotations

from verdict.expressions.accessors import (
    eval_bool,
    eval_bool_array,
    eval_float,
    eval_float_array,
    eval_int,
    eval_int_array,
    eval_str,
    eval_str_array,
)
from verdict.expressions.nodes import (
    Eq,
    Expression,
    Get,
    Gt,
    Literal,
    collect_dependencies,
    eq,
    expression_depth,
    get,
    gt,
    literal,
    serialize,
)
from verdict.expressions.type_check import check_args_share_type
from verdict.expressions.types import BOOL, FLOAT, INT, STR, Type, TypeKind
from verdict.expressions.values import Value

__all__: list[str] = [
    # Types and values
    "Type",
    "TypeKind",
    "BOOL",
    "INT",
    "FLOAT",
    "STR",
    "Value",
    # Nodes
    "Expression",
    "Literal",
    "Get",
    "Eq",
    "Gt",
    # Construction
    "literal",
    "get",
    "eq",
    "gt",
    # Tree utilities
    "serialize",
    "collect_dependencies",
    "expression_depth",
    "check_args_share_type",
    # Narrowing evaluators
    "eval_bool",
    "eval_int",
    "eval_float",
    "eval_str",
    "eval_bool_array",
    "eval_int_array",
    "eval_float_array",
    "eval_str_array",
]
