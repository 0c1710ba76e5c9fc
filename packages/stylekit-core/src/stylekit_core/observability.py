"""Structured logging for stylekit.

This module provides:
- Structured logging setup via structlog
- A timed operation helper that logs start/completion/failure of a step
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "stylekit"

_logger: BoundLogger | None = None


def get_logger() -> BoundLogger:
    """Get the package logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        >>> logger = get_logger()
        >>> logger.info("compile_requested", file="src/app.scss")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(LOGGER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for stylekit.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
    )


@contextmanager
def operation(
    name: str,
    *,
    log: Any | None = None,
    **attributes: Any,
) -> Iterator[None]:
    """Log the start, completion and failure of one step of a job.

    Args:
        name: Operation name (e.g., "transform", "persist").
        log: Bound logger to use. Defaults to the package logger.
        **attributes: Extra key/value pairs attached to every entry.

    Example:
        >>> with operation("transform", file="src/app.scss"):
        ...     css = await transformer.transform(path, options)
    """
    logger = log if log is not None else get_logger()
    start = time.monotonic()
    logger.debug(f"{name}_started", **attributes)
    try:
        yield
    except Exception as exc:
        duration_ms = int((time.monotonic() - start) * 1000)
        logger.warning(f"{name}_failed", error=str(exc), duration_ms=duration_ms, **attributes)
        raise
    duration_ms = int((time.monotonic() - start) * 1000)
    logger.debug(f"{name}_completed", duration_ms=duration_ms, **attributes)
