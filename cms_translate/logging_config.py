"""structlog setup for the CLI and library consumers."""

import logging
import sys
from typing import Literal

import structlog


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # resolve sys.stderr per logger so redirected streams are honoured
    return structlog.PrintLogger(sys.stderr)


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["console", "json"] = "console",
) -> None:
    """
    Configure structlog globally.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...)
        log_format: "console" for coloured human output, "json" for log shippers
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    else:
        renderer = structlog.dev.ConsoleRenderer()
        timestamper = structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]
    # ConsoleRenderer formats exceptions itself
    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
