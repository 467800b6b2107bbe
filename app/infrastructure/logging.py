"""Structured logging setup.

Configures structlog so that every module can simply call
``structlog.get_logger()`` and emit key/value events.
"""

import logging

import structlog

from app.infrastructure.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog processors and the stdlib root logger.

    Args:
        settings: Application settings (log level and renderer).
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", level=level)

    renderer: structlog.types.Processor
    if settings.log_json and not settings.debug:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
