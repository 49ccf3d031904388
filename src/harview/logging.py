"""Structured logging configuration using structlog.

Events are snake_case names with keyword context, e.g.
``LOG.info("har_uploaded", file_name=..., entries=...)``. Output goes to
stderr so ``harview domains`` output on stdout stays clean.
"""

import logging as stdlib_logging
import sys
from typing import Any

import structlog

DEFAULT_LEVEL = stdlib_logging.INFO


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Unknown names fall back to INFO instead of failing startup.
    """
    value = stdlib_logging.getLevelName(level.upper())
    return value if isinstance(value, int) else DEFAULT_LEVEL


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure structlog for harview.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output JSON lines. If False, use console-friendly format.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        # Keep non-ASCII file names (e.g. Chinese) readable
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
