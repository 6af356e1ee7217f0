"""Composition root: backends and services are chosen here, once."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .providers import MockSearchProvider
from .providers.amadeus import AmadeusSearchProvider
from .ratelimit import MemoryRateLimiter, StoreRateLimiter
from .services.flight_lookup import FlightLookupService
from .services.popular_routes import PopularRoutesService
from .services.price_history import PriceHistoryService
from .services.price_insight import PriceInsightService
from .services.search_service import SearchService
from .services.session_service import SessionService
from .services.smart_routes import SmartRoutesService
from .store import MemoryStore, RedisStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import ApiSettings
    from .providers import SearchProvider
    from .ratelimit import RateLimiter
    from .store import Store

logger = logging.getLogger(__name__)


def create_store(settings: ApiSettings) -> Store:
    if settings.store_backend == "redis":
        return RedisStore.from_url(settings.redis_url)
    if settings.store_backend == "memory":
        if settings.is_production:
            logger.warning("Memory store in production: state is per instance")
        return MemoryStore()
    msg = f"Unknown store backend: {settings.store_backend!r}"
    raise ValueError(msg)


def create_search_provider(settings: ApiSettings) -> SearchProvider:
    if settings.search_provider == "amadeus":
        return AmadeusSearchProvider.from_settings(settings)
    if settings.search_provider == "mock":
        if settings.is_production and not settings.allow_mocks_in_prod:
            msg = (
                "Mock search provider is disabled in production; "
                "set NAVO_SEARCH_PROVIDER=amadeus or NAVO_ALLOW_MOCKS_IN_PROD=true"
            )
            raise RuntimeError(msg)
        return MockSearchProvider()
    msg = f"Unknown search provider: {settings.search_provider!r}"
    raise ValueError(msg)


def create_rate_limiter(settings: ApiSettings, store: Store) -> RateLimiter:
    if settings.store_backend == "memory":
        return MemoryRateLimiter()
    return StoreRateLimiter(store)


@dataclass
class ServiceContainer:
    settings: ApiSettings
    store: Store
    provider: SearchProvider
    rate_limiter: RateLimiter
    history: PriceHistoryService
    insights: PriceInsightService
    sessions: SessionService
    search: SearchService
    flight_lookup: FlightLookupService
    popular_routes: PopularRoutesService
    smart_routes: SmartRoutesService

    async def aclose(self) -> None:
        await self.provider.close()
        await self.store.close()


def build_container(
    settings: ApiSettings,
    *,
    store: Store | None = None,
    provider: SearchProvider | None = None,
    rate_limiter: RateLimiter | None = None,
    clock: Callable[[], float] = time.time,
) -> ServiceContainer:
    """Wire every service; explicit arguments override the settings."""
    store = store or create_store(settings)
    provider = provider or create_search_provider(settings)
    rate_limiter = rate_limiter or create_rate_limiter(settings, store)

    history = PriceHistoryService(store, clock=clock)
    insights = PriceInsightService(history)
    sessions = SessionService(
        store,
        session_ttl=settings.session_ttl,
        flight_ttl=settings.flight_ttl,
        clock=clock,
    )
    search = SearchService(
        provider,
        store,
        sessions,
        history,
        insights,
        cache_ttl=settings.search_cache_ttl,
    )
    logger.info(
        "Services wired: store=%s provider=%s limiter=%s",
        store.name,
        provider.source.value,
        rate_limiter.name,
    )
    return ServiceContainer(
        settings=settings,
        store=store,
        provider=provider,
        rate_limiter=rate_limiter,
        history=history,
        insights=insights,
        sessions=sessions,
        search=search,
        flight_lookup=FlightLookupService(sessions, search),
        popular_routes=PopularRoutesService(history, clock=clock),
        smart_routes=SmartRoutesService(history, clock=clock),
    )
