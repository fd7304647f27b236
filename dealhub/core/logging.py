"""
core/logging.py
---------------
Structured logging using structlog.
DEBUG=true  → human-readable console output
DEBUG=false → JSON (for log aggregators)

Services log state changes as key/value events: rooms, assets and files
created or removed, share-gate rejections, tracked views, posted comments,
and object-store writes and read failures. Room passwords, share tokens and
session tokens are never passed to a logger.

botocore is held at WARNING outside debug so request signing does not flood
the output; unhandled exceptions keep their traceback via format_exc_info.
"""

import logging
import sys

import structlog

from dealhub.core.config import settings


def configure_logging() -> None:
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if not settings.DEBUG:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("botocore").setLevel(logging.WARNING)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.DEBUG
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__):
    return structlog.get_logger(name)
