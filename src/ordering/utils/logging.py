"""Logging setup for the storefront.

structlog renders through the stdlib root logger, so Protean, openpyxl and our
own modules share one set of handlers. The HTTP middleware binds a
``request_id`` per request; the submission and revision flows bind the
``order_id`` around chat delivery so adapter log lines point back at the order.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

from ordering.settings import environment

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVIRONMENTS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "urllib3", "openpyxl")
_MAX_LOG_BYTES = 10 * 1024 * 1024

_configured = False


def log_level() -> str:
    return os.getenv("LOG_LEVEL", _LEVELS.get(environment(), "INFO")).upper()


def _handlers(level: str) -> list[logging.Handler]:
    log_dir = Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    for filename, handler_level in (("storefront.log", level), ("storefront_error.log", logging.ERROR)):
        handler = RotatingFileHandler(log_dir / filename, maxBytes=_MAX_LOG_BYTES, backupCount=5, encoding="utf-8")
        handler.setLevel(handler_level)
        handlers.append(handler)
    return handlers


def _processors() -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if environment() in _JSON_ENVIRONMENTS:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(max_frames=2),
            )
        )
    return processors


def configure_logging() -> None:
    """Install handlers and the structlog pipeline; later calls are no-ops."""
    global _configured
    if _configured:
        return

    level = log_level()
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = _handlers(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def add_context(**kwargs) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def order_context(order_id):
    """Context manager tagging every log line inside it with ``order_id``."""
    return structlog.contextvars.bound_contextvars(order_id=str(order_id))
