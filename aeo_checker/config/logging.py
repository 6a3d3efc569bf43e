"""Structured logging configuration."""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from aeo_checker.config.settings import settings


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structured logging with structlog.

    Args:
        level: Log level name; defaults to settings.logging.level
        json_output: Render JSON lines instead of console output;
            defaults to settings.logging.json
    """
    level_name = (level or settings.logging.level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    use_json = settings.logging.json if json_output is None else json_output

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    # Suppress noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
