"""OAuth2 client-credentials token cache for Amadeus.

:meth:`AmadeusTokenProvider.get_access_token` is the only entry point.
Concurrent callers that find the cached token stale share one in-flight
fetch instead of each requesting a token, which Amadeus rate-limits.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from ..base import SearchProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/security/oauth2/token"
# Refresh this many seconds before the token actually expires
TOKEN_REFRESH_BUFFER = 5 * 60


@dataclass(frozen=True)
class _CachedToken:
    value: str
    expires_at: float


class AmadeusTokenProvider:
    """Owns the cached token, its expiry and the pending fetch."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._client_id = client_id
        self._client_secret = client_secret
        self._clock = clock
        self._token: _CachedToken | None = None
        self._pending: asyncio.Future[_CachedToken] | None = None

    @property
    def has_valid_token(self) -> bool:
        return (
            self._token is not None
            and self._clock() < self._token.expires_at - TOKEN_REFRESH_BUFFER
        )

    async def get_access_token(self) -> str:
        """Cached token, or the result of the single in-flight refresh."""
        if self.has_valid_token:
            return self._token.value  # type: ignore[union-attr]
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._refresh())
        # A cancelled waiter must not cancel the fetch others are awaiting
        token = await asyncio.shield(self._pending)
        return token.value

    def clear(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        self._token = None
        logger.info("Amadeus token cache cleared")

    async def _refresh(self) -> _CachedToken:
        try:
            token = await self._fetch()
            self._token = token
            return token
        finally:
            self._pending = None

    async def _fetch(self) -> _CachedToken:
        if not self._client_id or not self._client_secret:
            raise SearchProviderError(
                "PROVIDER_NOT_CONFIGURED",
                "NAVO_AMADEUS_CLIENT_ID and NAVO_AMADEUS_CLIENT_SECRET must be set",
            )
        try:
            resp = await self._client.post(
                TOKEN_PATH,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Amadeus token fetch failed with status %d", status)
            raise SearchProviderError(
                "AUTH_FAILED",
                f"Amadeus authentication failed: {status}",
                status_code=status,
            ) from exc
        except httpx.TransportError as exc:
            logger.error("Amadeus token fetch failed: %s", exc)
            raise SearchProviderError(
                "AUTH_FAILED", "Amadeus authentication unreachable"
            ) from exc

        try:
            data = resp.json()
            value = data["access_token"]
            expires_in = int(data.get("expires_in", 0))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.error("Amadeus token response malformed: %s", exc)
            raise SearchProviderError(
                "AUTH_FAILED", "Amadeus returned an invalid token response"
            ) from exc
        if not value or not isinstance(value, str):
            raise SearchProviderError(
                "AUTH_FAILED", "Amadeus returned an empty access token"
            )

        logger.info("Amadeus token acquired, expires in %d seconds", expires_in)
        return _CachedToken(value=value, expires_at=self._clock() + expires_in)
