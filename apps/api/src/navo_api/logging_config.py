"""Structured JSON logging with redaction of sensitive fields.

Modules keep using ``logging.getLogger(__name__)``. Request-scoped code
wraps its logger in :class:`RequestLogger` so keyword arguments become
event metadata::

    log = RequestLogger(logger, request_id)
    log.info("POPULAR_ROUTES_REQUEST", limit=6)
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import TextIO

    from .config import ApiSettings

REDACTED = "[REDACTED]"
MAX_REDACT_DEPTH = 5

SENSITIVE_KEYS = frozenset(
    {
        "token",
        "access_token",
        "accesstoken",
        "refresh_token",
        "authorization",
        "auth",
        "secret",
        "client_secret",
        "clientsecret",
        "password",
        "api_key",
        "apikey",
        "credential",
        "credentials",
        "cookie",
        "salt",
    }
)

# Keyword arguments that belong to logging itself, not to the event
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

_secret_values: list[str] = []


def _is_sensitive(key: str) -> bool:
    normalized = key.lower().replace("-", "_")
    return normalized in SENSITIVE_KEYS or normalized.endswith(
        ("_token", "_secret", "_password")
    )


def _scrub(text: str) -> str:
    for secret in _secret_values:
        text = text.replace(secret, REDACTED)
    return text


def redact(value: Any, depth: int = 0) -> Any:
    """Copy of ``value`` with sensitive keys and configured secrets masked."""
    if depth > MAX_REDACT_DEPTH:
        return "[MAX_DEPTH]"
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _is_sensitive(str(k)) else redact(v, depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        return [redact(v, depth + 1) for v in value]
    if isinstance(value, str):
        return _scrub(value)
    return value


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, event, ts, logger and metadata."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname.lower(),
            "event": _scrub(record.getMessage()),
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "logger": record.name,
        }
        data = getattr(record, "event_data", None)
        if data:
            payload.update(redact(data))
        if record.exc_info:
            payload["exception"] = _scrub(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


class RequestLogger(logging.LoggerAdapter):
    """Adapter binding a request id and turning kwargs into metadata."""

    def __init__(self, logger: logging.Logger, request_id: str | None = None) -> None:
        super().__init__(logger, {"request_id": request_id})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        data = {k: kwargs.pop(k) for k in list(kwargs) if k not in _LOGGING_KWARGS}
        if self.extra.get("request_id"):
            data = {"request_id": self.extra["request_id"], **data}
        extra = dict(kwargs.get("extra") or {})
        extra["event_data"] = data
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(settings: ApiSettings, stream: TextIO | None = None) -> None:
    """Install the root handler; JSON unless ``log_json`` is off."""
    _secret_values[:] = settings.secret_values()

    handler = logging.StreamHandler(stream or sys.stdout)
    if settings.log_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level.upper())
