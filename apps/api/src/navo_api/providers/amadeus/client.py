"""Amadeus ``/v2/shopping/flight-offers`` search provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from navo_core.schemas import SearchSource

from ...retry import async_retry
from ..base import ProviderResult, SearchProvider, SearchProviderError
from .auth import AmadeusTokenProvider
from .mapper import map_flight_offers

if TYPE_CHECKING:
    from ...config import ApiSettings
    from ...schemas.search import FlightSearchQuery

logger = logging.getLogger(__name__)

OFFERS_PATH = "/v2/shopping/flight-offers"
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


def _is_retryable(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS
    return isinstance(exc, httpx.TransportError)


def build_params(query: FlightSearchQuery) -> dict[str, Any]:
    params: dict[str, Any] = {
        "originLocationCode": query.origin,
        "destinationLocationCode": query.destination,
        "departureDate": query.depart.isoformat(),
        "adults": query.adults,
        "currencyCode": query.currency,
        "max": query.max_results,
    }
    if query.return_date:
        params["returnDate"] = query.return_date.isoformat()
    if query.cabin:
        params["travelClass"] = query.cabin.value
    if query.non_stop is not None:
        params["nonStop"] = "true" if query.non_stop else "false"
    return params


class AmadeusSearchProvider(SearchProvider):
    """Thin async wrapper around the Amadeus flight offers search."""

    source = SearchSource.AMADEUS

    def __init__(
        self,
        *,
        base_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 15.0,
        max_retries: int = 2,
        retry_base_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self.tokens = AmadeusTokenProvider(self._client, client_id, client_secret)
        # Retry on transient HTTP / connection errors
        self._get_offers = async_retry(
            max_retries=max_retries,
            base_delay=retry_base_delay,
            max_delay=5.0,
            exceptions=(httpx.HTTPStatusError, httpx.TransportError),
            retry_if=_is_retryable,
        )(self._get_offers_once)

    @classmethod
    def from_settings(cls, settings: ApiSettings) -> AmadeusSearchProvider:
        return cls(
            base_url=settings.amadeus_base_url,
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            timeout=settings.amadeus_timeout,
            max_retries=settings.amadeus_max_retries,
        )

    async def _get_offers_once(self, params: dict[str, Any]) -> dict[str, Any]:
        token = await self.tokens.get_access_token()
        resp = await self._client.get(
            OFFERS_PATH,
            params=params,
            headers={"Authorization": f"Bearer {token}"},
        )
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            raise SearchProviderError(
                "PROVIDER_ERROR", "Amadeus returned a non-JSON response"
            ) from exc
        if not isinstance(payload, dict):
            raise SearchProviderError(
                "PROVIDER_ERROR", "Amadeus returned an unexpected payload"
            )
        return payload

    async def search(self, query: FlightSearchQuery) -> ProviderResult:
        """Call ``GET /v2/shopping/flight-offers`` and map the offers."""
        try:
            payload = await self._get_offers(build_params(query))
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 401:
                self.tokens.clear()
            code = "PROVIDER_RATE_LIMITED" if status == 429 else "PROVIDER_ERROR"
            raise SearchProviderError(
                code, f"Amadeus search failed: {status}", status_code=status
            ) from exc
        except httpx.TransportError as exc:
            raise SearchProviderError(
                "PROVIDER_UNAVAILABLE", f"Amadeus search unreachable: {exc}"
            ) from exc

        flights, skipped = map_flight_offers(payload)
        logger.debug(
            "Amadeus search returned %d offers (%d skipped)", len(flights), skipped
        )
        warnings = [f"{skipped} offers skipped due to invalid data"] if skipped else []
        return ProviderResult(flights=flights, skipped=skipped, warnings=warnings)

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()
