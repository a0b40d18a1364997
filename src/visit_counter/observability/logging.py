"""Logging configuration for the visit counter.

JSON lines in production, a readable single-line format elsewhere. The
request id and the date key being counted travel in contextvars so every
record emitted while serving a request carries them.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Optional

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_date_key: ContextVar[Optional[str]] = ContextVar("date_key", default=None)


def set_log_context(
    request_id: Optional[str] = None,
    date_key: Optional[str] = None,
):
    """Set contextual logging fields for the current async context."""
    if request_id is not None:
        _request_id.set(request_id)
    if date_key is not None:
        _date_key.set(date_key)


def clear_log_context():
    """Clear all contextual logging fields."""
    _request_id.set(None)
    _date_key.set(None)


def get_log_context() -> dict:
    context = {}
    request_id = _request_id.get()
    if request_id:
        context["request_id"] = request_id
    date_key = _date_key.get()
    if date_key:
        context["date_key"] = date_key
    return context


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter with context fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(get_log_context())

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable log formatter with context fields for development."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{self.formatTime(record, self.datefmt)}]",
            f"{record.levelname:8s}",
            f"{record.name}:",
            record.getMessage(),
        ]

        context = get_log_context()
        if context:
            ctx_parts = []
            if "request_id" in context:
                ctx_parts.append(f"req={context['request_id']}")
            if "date_key" in context:
                ctx_parts.append(f"day={context['date_key']}")
            parts.append(f"[{', '.join(ctx_parts)}]")

        msg = " ".join(parts)

        if record.exc_info and record.exc_info[1]:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def configure_logging(environment: str = "development", log_level: str = "INFO"):
    """Configure logging for the application.

    Args:
        environment: "production" for JSON output, anything else for human-readable.
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger.addHandler(handler)

    # Quiet noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
