"""Logging configuration utilities."""

import json
import logging
import sys
from typing import Any, MutableMapping

_REDACTED_KEYS = frozenset({"authorization", "api_key", "groq_api_key"})
_MAX_FIELD_LENGTH = 200

# LogRecord attributes that are not user-supplied ``extra`` context.
_RECORD_ATTRS = frozenset(
    {
        "args",
        "msg",
        "name",
        "exc_info",
        "exc_text",
        "stack_info",
        "created",
        "msecs",
        "relativeCreated",
        "levelno",
        "levelname",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Formatter that renders log records as JSON lines.

    Credential-bearing extras are masked and long strings are clipped so a
    suspect completion never lands in the logs verbatim.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: MutableMapping[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in payload or key in _RECORD_ATTRS:
                continue

            payload[key] = _scrub(key, value)

        return json.dumps(payload, default=str)


def _scrub(key: str, value: Any) -> Any:
    if key.lower() in _REDACTED_KEYS:
        return "***"
    if isinstance(value, str) and len(value) > _MAX_FIELD_LENGTH:
        return f"{value[:_MAX_FIELD_LENGTH]}... ({len(value)} chars)"
    return value


def configure_logging(level: str) -> None:
    """Configure root logger for structured logging."""

    logging_level = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging_level)
    root_logger.addHandler(handler)
