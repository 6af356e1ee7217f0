"""Flight search orchestration.

Cache lookup, provider call, decision labels, then best-effort
enrichment: price insights, price recording and a session for detail
pages. Only the provider call can fail the search.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from navo_core.schemas import FlightResult, RouteRef, SearchSource
from navo_ranking import compute_decision_labels

from ..logging_config import RequestLogger
from ..providers import SearchProviderError
from ..schemas.search import FlightSearchResponse, SearchMeta
from ..store import StoreError
from ..store.keys import search_key

if TYPE_CHECKING:
    from ..providers import SearchProvider
    from ..schemas.search import FlightSearchQuery
    from ..store import Store
    from .price_history import PriceHistoryService
    from .price_insight import PriceInsightService
    from .session_service import SessionService

logger = logging.getLogger(__name__)

SEARCH_CACHE_TTL = 5 * 60


class SearchFailedError(Exception):
    """The provider failed; distinct from a search with zero results."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class SearchService:
    def __init__(
        self,
        provider: SearchProvider,
        store: Store,
        sessions: SessionService,
        history: PriceHistoryService,
        insights: PriceInsightService,
        *,
        cache_ttl: int = SEARCH_CACHE_TTL,
    ) -> None:
        self._provider = provider
        self._store = store
        self._sessions = sessions
        self._history = history
        self._insights = insights
        self._cache_ttl = cache_ttl

    async def _cached(
        self, key: str, log: RequestLogger
    ) -> tuple[list[FlightResult], SearchSource] | None:
        try:
            cached = await self._store.get_json(key)
        except StoreError as exc:
            log.warning("SEARCH_CACHE_READ_FAILED", message=str(exc))
            return None
        if cached is None:
            return None
        flights = [FlightResult.model_validate(f) for f in cached["flights"]]
        return flights, SearchSource(cached["source"])

    async def _fetch(
        self, query: FlightSearchQuery, key: str, log: RequestLogger
    ) -> tuple[list[FlightResult], list[str]]:
        try:
            result = await self._provider.search(query)
        except SearchProviderError as exc:
            log.error(
                "FLIGHT_SEARCH_FAILED",
                code=exc.code,
                status=exc.status_code,
                message=exc.message,
            )
            raise SearchFailedError(exc.code, exc.message) from exc

        try:
            await self._store.set_json(
                key,
                {
                    "flights": [f.to_wire() for f in result.flights],
                    "source": self._provider.source.value,
                },
                ttl=self._cache_ttl,
            )
        except StoreError as exc:
            log.warning("SEARCH_CACHE_WRITE_FAILED", message=str(exc))
        return result.flights, result.warnings

    async def _with_insights(
        self,
        query: FlightSearchQuery,
        flights: list[FlightResult],
        log: RequestLogger,
    ) -> list[FlightResult]:
        route = RouteRef(origin=query.origin, destination=query.destination)
        try:
            insights = await self._insights.get_price_insights_for_flights(
                flights, route
            )
        except StoreError as exc:
            log.warning("PRICE_INSIGHT_FAILED", message=str(exc))
            return flights
        return [
            f.model_copy(update={"price_insight": insight}) if insight else f
            for f, insight in zip(flights, insights, strict=True)
        ]

    async def search(
        self, query: FlightSearchQuery, *, request_id: str | None = None
    ) -> FlightSearchResponse:
        """Run a search; raises :class:`SearchFailedError` on provider failure."""
        log = RequestLogger(logger, request_id)
        started = time.perf_counter()
        key = search_key(query.params())

        warnings: list[str] = []
        hit = await self._cached(key, log)
        if hit is not None:
            flights, source = hit
        else:
            flights, warnings = await self._fetch(query, key, log)
            source = self._provider.source

        decisions = compute_decision_labels(flights)
        flights = await self._with_insights(query, flights, log)

        if hit is None and flights:
            await self._history.record_search_prices(
                query.origin, query.destination, query.depart, flights
            )

        sid = None
        if flights:
            try:
                sid = await self._sessions.create_session(query, flights, source)
            except StoreError as exc:
                log.warning("SESSION_CREATE_FAILED", message=str(exc))

        duration_ms = int((time.perf_counter() - started) * 1000)
        log.info(
            "FLIGHT_SEARCH_SUCCESS",
            route=f"{query.origin}-{query.destination}",
            count=len(flights),
            cached=hit is not None,
            duration_ms=duration_ms,
        )
        return FlightSearchResponse(
            flights=flights,
            decisions=decisions.decisions,
            stats=decisions.stats,
            source=source,
            sid=sid,
            meta=SearchMeta(
                count=len(flights),
                duration_ms=duration_ms,
                cached=hit is not None,
                warning="; ".join(warnings) or None,
            ),
            request_id=request_id,
        )
