"""Structured logging setup.

structlog renders on top of stdlib logging so library and service logs share
one handler. Use ``get_logger(__name__)`` and log dotted event names with
key-value context, e.g. ``logger.info("alerts.raised", category=...)``.
"""

import logging

import structlog

from config import settings


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """Configure stdlib logging and structlog processors.

    Args:
        level: Log level name (defaults to settings.log_level)
        json_format: Render JSON lines instead of console output
    """
    level = (level or settings.log_level).upper()
    json_format = settings.log_json if json_format is None else json_format

    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )
    )

    root = logging.getLogger()
    # Remove existing handlers to avoid duplicates
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
