"""Verdict constants.

Single source of truth for operator tags, environment variable names, and
the default evaluation limits shared by the parser, the expression nodes,
and the configuration layer.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Operator Tags
# =============================================================================

#: Tag of the context lookup operator (``{"get": ["name"]}``)
OP_GET: Final[str] = "get"

#: Tag of the equality operator (``{"eq": [a, b]}``)
OP_EQ: Final[str] = "eq"

#: Tag of the strict greater-than operator (``{"gt": [a, b]}``)
OP_GT: Final[str] = "gt"

# =============================================================================
# Limits
# =============================================================================

#: Default maximum nesting depth of an expression tree. Evaluation,
#: type-checking and parsing refuse trees deeper than this.
DEFAULT_MAX_EXPRESSION_DEPTH: Final[int] = 256

#: Upper bound accepted by configuration; kept below the interpreter's
#: default recursion limit.
MAX_EXPRESSION_DEPTH_LIMIT: Final[int] = 400

#: Signed 64-bit integer range for Int values
INT_MIN: Final[int] = -(2**63)
INT_MAX: Final[int] = 2**63 - 1

# =============================================================================
# Environment
# =============================================================================

ENV_PREFIX: Final[str] = "VERDICT_"

#: Project-level configuration file name
PROJECT_CONFIG_FILENAME: Final[str] = "verdict.yaml"
