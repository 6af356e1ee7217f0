"""Per-request identifiers, echoed in the ``X-Request-Id`` header."""

from __future__ import annotations

import secrets
import string
import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request  # noqa: TC002

if TYPE_CHECKING:
    from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-Id"

_BASE36 = string.digits + string.ascii_lowercase

# First match wins
_PREFIXES: list[tuple[str, str]] = [
    ("/api/routes/popular", "pop"),
    ("/api/routes/smart-popular", "smart"),
    ("/api/flights/search", "search"),
    ("/api/flights/", "flight"),
    ("/api/track/", "track"),
]


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_request_id(prefix: str = "req", *, now_ms: int | None = None) -> str:
    """``{prefix}_{base36 ms timestamp}_{6 random base36 chars}``."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{prefix}_{_base36(timestamp)}_{suffix}"


def prefix_for_path(path: str) -> str:
    for start, prefix in _PREFIXES:
        if path.startswith(start):
            return prefix
    return "req"


def get_request_id(request: Request) -> str:
    """Id assigned by :class:`RequestIdMiddleware` (generated if missing)."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = generate_request_id(prefix_for_path(request.url.path))
        request.state.request_id = request_id
    return request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign ``request.state.request_id`` and echo it on the response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = get_request_id(request)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
