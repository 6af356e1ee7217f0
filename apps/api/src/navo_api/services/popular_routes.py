"""Curated popular routes with data-backed prices."""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from navo_core.data.popular_routes import get_enabled_popular_routes
from navo_core.schemas import PopularRouteCard, RouteCardsMeta

from ..schemas.routes import PopularRoutesResponse
from .price_insight import INSIGHT_WINDOW_DAYS, MIN_SAMPLES

if TYPE_CHECKING:
    from collections.abc import Callable

    from navo_core.data.popular_routes import PopularRoute
    from navo_core.schemas import PriceHistoryAggregate

    from .price_history import PriceHistoryService

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6
MAX_LIMIT = 12


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    return max(1, min(MAX_LIMIT, limit))


def _card(
    route: PopularRoute, aggregate: PriceHistoryAggregate | None
) -> PopularRouteCard:
    sample_count = aggregate.sample_count if aggregate else 0
    reliable = sample_count >= MIN_SAMPLES
    return PopularRouteCard(
        id=f"{route.origin}-{route.destination}",
        origin=route.origin,
        destination=route.destination,
        origin_city=route.origin_city,
        label_city=route.label_city,
        country=route.country,
        route_label=f"{route.origin_city} → {route.label_city}",
        price=aggregate.min_price if reliable else None,
        sample_count=sample_count,
        has_reliable_data=reliable,
        last_updated=aggregate.last_updated if aggregate else None,
    )


class PopularRoutesService:
    """Route cards for the home page.

    A card carries a price only when its route has ``MIN_SAMPLES`` recent
    samples; the price is the lowest one observed in the window.
    """

    def __init__(
        self,
        history: PriceHistoryService,
        *,
        routes: Callable[[], list[PopularRoute]] = get_enabled_popular_routes,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._history = history
        self._routes = routes
        self._clock = clock

    async def get_popular_routes_for_api(
        self, limit: int | None = None
    ) -> PopularRoutesResponse:
        limit = clamp_limit(limit)
        candidates = self._routes()[: limit * 2]

        results = await asyncio.gather(
            *(
                self._history.get_price_history_for_route(
                    r.origin, r.destination, INSIGHT_WINDOW_DAYS
                )
                for r in candidates
            ),
            return_exceptions=True,
        )

        cards = []
        for route, result in zip(candidates, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "POPULAR_ROUTE_FETCH_FAILED %s-%s: %s",
                    route.origin,
                    route.destination,
                    result,
                )
                result = None
            cards.append(_card(route, result))

        # Stable: curated order is kept within each group
        cards.sort(key=lambda c: not c.has_reliable_data)
        cards = cards[:limit]

        logger.info(
            "POPULAR_ROUTES_FETCHED count=%d with_price=%d",
            len(cards),
            sum(1 for c in cards if c.price is not None),
        )
        return PopularRoutesResponse(
            routes=cards,
            meta=RouteCardsMeta(
                fetched_at=datetime.fromtimestamp(self._clock(), UTC),
                min_samples_required=MIN_SAMPLES,
            ),
        )
