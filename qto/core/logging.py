"""
Logging configuration for the application.
structlog everywhere: JSON in production, console rendering elsewhere.
Credentials never reach the log output.
"""

import logging
import sys
from typing import Any

import structlog
from asgi_correlation_id import correlation_id

from qto.config import get_settings

REDACTED = "[redacted]"

# Event keys whose values are credentials
SENSITIVE_KEYS = frozenset(
    {"password", "confirm_password", "password_hash", "token", "session_token", "cookie", "secret_key"}
)

# Chatty third-party loggers kept at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ("multipart", "python_multipart", "passlib", "sqlalchemy.engine")


def _add_correlation_id(logger, method_name, event_dict):
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _redact_credentials(logger, method_name, event_dict):
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def _renderer(production: bool):
    return structlog.processors.JSONRenderer() if production else structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through it."""
    settings = get_settings()

    shared_processors: list[Any] = [
        _add_correlation_id,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_credentials,
    ]

    processors = list(shared_processors)
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(settings.is_production))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # uvicorn and sqlalchemy log through the stdlib
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings.is_production),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
