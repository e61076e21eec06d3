"""Structured logging configuration using structlog.

Every log line carries the service name. Inside an HTTP request it also
carries the request id, method and path bound by the request middleware.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from lager import __version__
from lager.config import settings

# Third-party loggers kept at WARNING unless debug is on
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "aiosqlite")


def _add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "lager")
    event_dict.setdefault("version", __version__)
    return event_dict


def setup_logging() -> None:
    """Configure structlog and the standard library root logger.

    Renders JSON lines when `log_json` is set outside of dev, colored
    console output otherwise. With `debug` on, SQL statements are logged too.
    """
    level = logging.getLevelName(settings.log_level.upper())
    use_json = settings.log_json and settings.environment != "dev"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_service,
    ]

    if use_json:
        renderer: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )


def bind_request_context(**context: Any) -> None:
    """Replace the per-request logging context (request id, method, path)."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Get a logger, optionally with context bound to every event.

    Example:
        logger = get_logger(__name__, component="scanner")
        logger.info("Camera opened", index=0)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
