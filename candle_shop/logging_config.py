"""
Structured logging configuration.

Uses structlog on top of the standard library so that third-party loggers
(uvicorn, sqlalchemy) and our own events end up in the same JSON stream.
"""
import logging
import sys
from typing import IO, Any

import structlog
from pythonjsonlogger import jsonlogger

from candle_shop.config import settings


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the service name to every log event."""
    event_dict["service"] = settings.SERVICE_NAME
    return event_dict


def build_json_handler(stream: IO[str]) -> logging.Handler:
    """
    Handler writing one JSON object per record
    
    structlog passes the event fields as ``extra``, so they become top-level
    keys next to ``message`` (the event name).
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(jsonlogger.JsonFormatter("%(message)s"))
    return handler


def setup_logging() -> None:
    """Configure structlog and the root logger"""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(build_json_handler(sys.stdout))

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
