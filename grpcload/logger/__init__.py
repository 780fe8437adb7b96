"""Logger module for grpcload.

Structured logging via structlog. Events are short dotted names with the
context passed as keyword arguments.

Usage:
    from grpcload.logger import configure_logging, session_logger as logger

    configure_logging()  # once, at process start
    logger.info("config.built", call="pkg.Svc/Method", host="localhost:50051")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor

# Environment variables controlling the log output
LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FORMAT_ENV = "GRPCLOAD_LOG_FORMAT"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"

Logger = Any


def _resolve_level(level: str | None) -> int:
    level_name = (level or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog for the process.

    Args:
        level: Level name (e.g. "DEBUG"). Falls back to $LOG_LEVEL, then INFO.
        fmt: "console" for human-readable output, "json" for one JSON object
            per line. Falls back to $GRPCLOAD_LOG_FORMAT, then "console".
    """
    fmt = (fmt or os.getenv(LOG_FORMAT_ENV, DEFAULT_LOG_FORMAT)).lower()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # Logs go to stderr so stdout stays free for the JSON report.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# Shared logger instance for modules that just need basic structured logging
session_logger: Logger = structlog.get_logger("grpcload")

__all__ = [
    "Logger",
    "configure_logging",
    "session_logger",
]
