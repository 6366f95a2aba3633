"""
Structured logging for mapper formatting.

Modules log through structlog with snake_case event names:

    logger = get_logger(__name__)
    logger.debug("formatter_registered", scope="global", formatter="Hard")

If the host application has not configured structlog by the time the first
logger is requested, configure_logging() runs with the settings defaults
(WARNING, console, stderr). Calling configure_logging() again, or
configuring structlog directly, takes effect for every module logger.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import FilteringBoundLogger, Processor

from .config import LOG_FORMATS, settings

__all__ = ["configure_logging", "debug_enabled", "get_logger"]


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolved per logger so a replaced sys.stderr is honoured
    return structlog.PrintLogger(sys.stderr)


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog rendering.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR (default: from settings)
        log_format: "console" or "json" (default: from settings)

    Raises:
        ValueError: If log_format is not a known format
    """
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    fmt = (log_format or settings.log_format).lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {fmt!r}")

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]

    if fmt == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # No logger caching: module loggers pick up reconfiguration
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structlog logger bound to a module name."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def debug_enabled(logger: Any) -> bool:
    """True if ``logger`` would emit debug events.

    Lets hot paths skip building expensive event fields.
    """
    check = getattr(logger, "is_enabled_for", None)
    if check is None:
        return True
    return bool(check(logging.DEBUG))
