"""
Logging configuration using structlog
"""

import logging
import secrets
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

request_id_ctx: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class RequestContextFilter:
    """Add the current request id to the event dict."""

    def __call__(self, logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        request_id = request_id_ctx.get()
        if request_id:
            event_dict['request_id'] = request_id
        return event_dict


def configure_logging(debug: bool = False, level: str = 'INFO') -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        debug: If True, render human-readable console output and log at DEBUG.
            Otherwise render JSON lines at ``level``.
        level: Log level name used when ``debug`` is off.
    """
    log_level = logging.DEBUG if debug else logging.getLevelName(level.upper())

    logging.basicConfig(level=log_level, stream=sys.stdout, format='%(message)s', force=True)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        RequestContextFilter(),
        structlog.processors.TimeStamper(fmt='ISO', utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return secrets.token_urlsafe(8)


def set_request_id(request_id: Optional[str] = None) -> str:
    if request_id is None:
        request_id = generate_request_id()
    request_id_ctx.set(request_id)
    return request_id


def clear_request_id() -> None:
    request_id_ctx.set(None)


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()
