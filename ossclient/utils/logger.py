"""Structured logging configuration."""

import logging
import sys
from typing import Any, Optional
import structlog
from ..config import Settings, settings as default_settings

REDACTED = "***"

# Event keys that may carry credentials or signatures
SECRET_KEYS = frozenset(
    ["authorization", "key_secret", "oss_access_key_secret", "signature", "security-token"]
)


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k: REDACTED if str(k).lower() in SECRET_KEYS else _redact(v)
            for k, v in value.items()
        }
    return value


def redact_secrets(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Mask credentials in an event, including nested header dicts."""
    return _redact(event_dict)


def configure_logging(config: Optional[Settings] = None) -> None:
    """
    Configure structlog for the client.

    Debug settings render colored console lines, otherwise one JSON object
    per event. Events below LOG_LEVEL are dropped before any processor runs.
    """
    config = config or default_settings
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if config.debug
        else structlog.processors.JSONRenderer()
    )
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if not config.debug:
        processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get structured logger instance."""
    return structlog.get_logger(name)
