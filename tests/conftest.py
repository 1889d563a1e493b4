from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator, Iterator
from pathlib import Path

import pytest

from verdict.context import Context, ContextSchema
from verdict.expressions.types import INT, STR, Type, TypeKind


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for the test environment.

    Runs for every test so that log output goes to stderr at WARNING and
    does not mix with test stdout.
    """
    from verdict.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory so tests that use
    os.chdir() do not affect other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all VERDICT_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("VERDICT_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def user_context() -> Context:
    """Context describing a typical signed-in user."""
    return (
        Context()
        .set_int("userId", 1)
        .set_str("country", "NZ")
        .set_bool("beta", True)
        .set_float("score", 0.75)
        .set_str_array("roles", ["admin", "editor"])
    )


@pytest.fixture
def user_schema() -> ContextSchema:
    """Schema matching ``user_context``."""
    return (
        ContextSchema()
        .declare("userId", INT)
        .declare("country", STR)
        .declare("beta", Type(TypeKind.BOOL))
        .declare("score", Type(TypeKind.FLOAT))
        .declare("roles", Type.array(TypeKind.STR, 2))
    )


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample verdict.yaml content for testing."""
    return """
max_expression_depth: 32
verbosity: info
variables:
  userId: Int
  roles: StrArray(2)
"""
