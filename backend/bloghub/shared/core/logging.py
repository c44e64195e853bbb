"""
Logging Configuration

structlog on top of the standard library logger.

    development  → coloured console lines
    test/production → one JSON object per line

    2024-01-15T10:30:00Z [info] Post created  post_id=550e8400-... request_id=3f2a...
    {"timestamp": "2024-01-15T10:30:00Z", "level": "info", "event": "Post created", "post_id": "550e8400-..."}

Request context (request_id, method, path, user_id) is bound through
contextvars by the request logging middleware and the auth dependency, so
every line logged while serving a request carries it.

Usage:
======
    from bloghub.shared.core.logging import get_logger, log_context

    logger = get_logger(__name__)
    logger.info("Post created", post_id=str(post.id))

    log_context(user_id=str(identity.id))
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from bloghub.config.settings import settings


# Never written to a log line, whatever the caller passes
REDACTED_KEYS = frozenset({"password", "password_hash", "token", "authorization", "secret_key"})


def redact_secrets(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "[redacted]"
    return event_dict


def setup_logging() -> None:
    """Configure structlog and the root logger. Runs once, on import."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind key/values to every log line emitted in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("bloghub")
