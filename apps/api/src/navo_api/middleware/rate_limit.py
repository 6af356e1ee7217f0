"""Fixed-window rate limiter middleware."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..logging_config import RequestLogger
from ..ratelimit import client_ip, limiter_key
from .request_id import get_request_id

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

# (method, path prefix, policy); first match wins
POLICY_ROUTES: list[tuple[str, str, str]] = [
    ("GET", "/api/flights/search", "search"),
    ("GET", "/api/flights/", "detail"),
    ("GET", "/api/routes/", "public"),
    ("POST", "/api/track/", "public"),
]


def policy_for(method: str, path: str) -> str | None:
    for route_method, prefix, policy in POLICY_ROUTES:
        if method == route_method and path.startswith(prefix):
            return policy
    return None


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the named policy for the route, answering 429 when exhausted."""

    async def dispatch(self, request: Request, call_next) -> Response:
        """Check rate limit, then forward to the next middleware/route."""
        policy_name = policy_for(request.method, request.url.path)
        if policy_name is None:
            return await call_next(request)

        container = request.app.state.container
        policy = container.settings.rate_limit_policies[policy_name]
        key = limiter_key(
            policy_name, client_ip(request), container.settings.rate_limit_salt
        )
        result = await container.rate_limiter.check(key, policy)

        if not result.allowed:
            request_id = get_request_id(request)
            RequestLogger(logger, request_id).warning(
                "RATE_LIMITED",
                policy=policy_name,
                client=key,
                reset_sec=result.reset_seconds,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "code": "RATE_LIMITED",
                    "message": "Too many requests. Try again later.",
                    "details": {"resetSec": result.reset_seconds},
                    "requestId": request_id,
                },
                headers=result.headers(),
            )

        response = await call_next(request)
        response.headers.update(result.headers())
        return response
