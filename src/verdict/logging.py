"""Structured logging for Verdict.

Verdict is a library, so it never configures logging on import; modules
only obtain loggers through ``get_logger``. Hosts that do not already run
structlog can call ``configure_logging`` once at startup:

- Pretty console output by default
- JSON output when VERDICT_LOG_FORMAT=json (or ``force_json=True``)
- Level passed explicitly, else the config's ``verbosity``, else
  VERDICT_LOG_LEVEL (default INFO)

Usage:
    from verdict.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__).bind(rule="beta_access")
    log.info("rule_evaluated", result=True)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from verdict.constants import ENV_PREFIX

if TYPE_CHECKING:
    from verdict.config import VerdictConfig

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

LOG_FORMAT_ENV_VAR = f"{ENV_PREFIX}LOG_FORMAT"
LOG_LEVEL_ENV_VAR = f"{ENV_PREFIX}LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _resolve_level(
    level: int | str | None, config: VerdictConfig | None = None
) -> int:
    """Resolve the level to a ``logging`` constant; explicit wins over config."""
    if isinstance(level, int):
        return level
    if level is None and config is not None:
        return config.log_level
    name = level or os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    return getattr(logging, name.upper(), logging.INFO)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    force_json: bool = False,
    level: int | str | None = None,
    config: VerdictConfig | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; each call replaces the previous handler.

    Args:
        force_json: Emit JSON regardless of VERDICT_LOG_FORMAT.
        level: Log level as a ``logging`` constant or name. If None, reads
            ``config.verbosity``, then VERDICT_LOG_LEVEL.
        config: Loaded settings whose ``verbosity`` sets the level when
            ``level`` is not given.
    """
    use_json = force_json or _is_json_output()
    log_level = _resolve_level(level, config)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A bound structlog logger supporting ``.bind(...)``.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind key/value pairs included in every subsequent log event.

    Example:
        bind_context(tenant="acme")
        log.info("rule_evaluated")  # includes tenant="acme"
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop all values bound with ``bind_context``."""
    structlog.contextvars.clear_contextvars()
