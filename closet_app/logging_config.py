"""JSON logging for the closet service.

Each record is rendered as a single JSON object. Fields passed to
:func:`log_event` land at the top level of that object after personal data is
masked, and every line carries the correlation id of the request that
produced it.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import re
import uuid
from typing import Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "closet_correlation_id", default=None
)

# Attributes present on every LogRecord; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}
_PRIVATE_FIELDS = frozenset(
    {"email", "password", "name", "image_url", "preview_image_ref", "favorite_colors"}
)
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")


def scrub_pii(value: Any) -> Any:
    """Mask emails, URLs and private fields anywhere inside ``value``."""

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        if value.lower().startswith(("http://", "https://")):
            return "[redacted-url]"
        return _EMAIL.sub("[redacted-email]", value)
    if isinstance(value, dict):
        return {
            key: "[redacted]" if key in _PRIVATE_FIELDS else scrub_pii(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [scrub_pii(item) for item in value]
    return str(value)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None) or record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        }
        payload.update(scrub_pii(extras))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: int | str = "INFO") -> None:
    """Send all logging through a single JSON handler on stderr."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def current_correlation_id() -> str:
    """Return the active correlation id, assigning a fresh one if none is set."""

    correlation_id = CORRELATION_ID.get()
    if correlation_id is None:
        correlation_id = uuid.uuid4().hex
        CORRELATION_ID.set(correlation_id)
    return correlation_id


@contextlib.contextmanager
def correlation_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Scope a correlation id to one request; the previous id is restored on exit."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(
    logger: logging.Logger, level: int, event: str, *, exc_info: bool = False, **fields: Any
) -> None:
    """Log ``event`` with ``fields`` as structured attributes.

    Field names must not collide with LogRecord attributes (``name``,
    ``message``, ``args`` ...).
    """

    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": current_correlation_id(), **fields},
    )


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "current_correlation_id",
    "get_logger",
    "log_event",
    "scrub_pii",
]
