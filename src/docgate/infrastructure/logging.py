"""Structlog configuration for the application.

Colored console output for development, JSON lines for production.
"""

import logging
import os
import sys

import structlog


def configure_logging(log_level: str = "INFO", json_output: bool | None = None) -> None:
    """Configure structlog processors and the minimum level.

    When ``json_output`` is None the renderer is picked from the terminal:
    console output on a TTY (or with FORCE_COLOR set), JSON otherwise.
    """
    if json_output is None:
        force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
        json_output = not (force_color or sys.stdout.isatty())

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
