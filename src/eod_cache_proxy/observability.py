"""Structured logging setup.

Usage:
    from eod_cache_proxy.observability import configure_logging

    configure_logging(level="INFO", json_format=False)

    logger = structlog.get_logger(__name__)
    logger.info("cache_control_rewritten", path="/api/eod/AAPL.US")
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structlog for the proxy process.

    Args:
        level: Minimum log level name, e.g. ``"INFO"`` or ``"DEBUG"``
        json_format: Render one JSON object per line instead of console output
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
