"""Logging setup.

Configures structlog with a level taken from settings.
"""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog processors and minimum level.

    Args:
        level: Standard logging level name (e.g. "INFO", "DEBUG").
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=True,
    )
