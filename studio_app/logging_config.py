"""Structured JSON logging for the studio.

Every record carries the correlation id and the name of the user action it
belongs to. Image payloads travel as base64 data URIs and can be megabytes
long, so they are summarised before they reach a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import uuid
from typing import Any, Dict, Iterator, Optional
from urllib.parse import urlparse

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)
CURRENT_OPERATION: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("operation", default=None)

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
_SECRET_KEYS = frozenset({"api_key", "google_api_key", "authorization", "token"})
MAX_FIELD_LENGTH = 500


class JsonFormatter(logging.Formatter):
    """One JSON object per line with correlation and operation metadata."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", record.getMessage()),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
            "action": CURRENT_OPERATION.get(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key in payload:
                continue
            payload[key] = redact_for_log(value)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None) -> None:
    """Send JSON logs to stderr; ``LOG_LEVEL`` sets the default level.

    ``STUDIO_LOG_FORMAT=text`` switches to a plain format for local runs.
    """

    handler = logging.StreamHandler()
    if os.getenv("STUDIO_LOG_FORMAT", "json").lower() == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())
    logging.root.handlers.clear()
    logging.basicConfig(level=level or os.getenv("LOG_LEVEL", "INFO"), handlers=[handler])


def _summarise(value: str) -> str:
    if value.startswith("data:"):
        header, _, body = value.partition(",")
        mime_type = header[5:].split(";", 1)[0] or "unknown"
        return f"[data-uri {mime_type} {len(body)} chars]"
    if value.startswith(("http://", "https://")):
        return f"[url {urlparse(value).netloc}]"
    if len(value) > MAX_FIELD_LENGTH:
        return value[:MAX_FIELD_LENGTH] + "..."
    return value


def redact_for_log(payload: Any) -> Any:
    """Mask secrets and shrink image payloads, recursing into containers."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _summarise(payload)
    if isinstance(payload, dict):
        return {
            key: "[redacted]" if str(key).lower() in _SECRET_KEYS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return _summarise(str(payload))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Use ``correlation_id`` or the current one, minting a new id if neither exists."""

    resolved = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    CORRELATION_ID.set(resolved)
    return resolved


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with ``fields`` as structured extras.

    Field names must not clash with ``LogRecord`` attributes (``name``,
    ``module``, ``filename`` ...); ``logging`` rejects those.
    """

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


@contextlib.contextmanager
def operation_context(name: str, correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id and action name around one user action.

    Nested scopes reuse the outer correlation id, so store and AI calls made
    by an action log under the action's id.
    """

    scoped_id = correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex
    id_token = CORRELATION_ID.set(scoped_id)
    operation_token = CURRENT_OPERATION.set(name)
    try:
        log_event(logging.getLogger("studio_app.operations"), logging.DEBUG, "operation_scope")
        yield scoped_id
    finally:
        CURRENT_OPERATION.reset(operation_token)
        CORRELATION_ID.reset(id_token)


__all__ = [
    "configure_logging",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
