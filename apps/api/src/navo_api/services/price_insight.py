"""Data-backed price insights.

An insight exists only when the route has at least ``MIN_SAMPLES``
samples in the last 30 days. Below that the answer is ``None``; nothing is
estimated to fill the gap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from navo_core.schemas import PriceContext, PriceInsight, RouteRef

if TYPE_CHECKING:
    from collections.abc import Sequence

    from navo_core.schemas import FlightResult, PriceHistoryAggregate

    from .price_history import PriceHistoryService

logger = logging.getLogger(__name__)

MIN_SAMPLES = 5
INSIGHT_WINDOW_DAYS = 30
SIGNIFICANT_DIFFERENCE_PCT = 5


def build_insight(
    route: RouteRef, current_price: int, aggregate: PriceHistoryAggregate
) -> PriceInsight | None:
    if aggregate.sample_count < MIN_SAMPLES or aggregate.average_price is None:
        return None
    average = aggregate.average_price
    lowest = aggregate.min_price
    difference = average - current_price
    return PriceInsight(
        route=route,
        current_price=current_price,
        historical_average=average,
        lowest_30_days=lowest,
        highest_30_days=aggregate.max_price,
        price_difference=difference,
        percentage_difference=int(abs(difference) / average * 100 + 0.5),
        is_below_average=current_price < average,
        is_lowest_recent=current_price <= lowest,
        sample_count=aggregate.sample_count,
    )


def insight_label(insight: PriceInsight | None) -> PriceContext | None:
    """``below_average`` / ``above_average`` when the gap is at least 5%."""
    if insight is None or insight.percentage_difference < SIGNIFICANT_DIFFERENCE_PCT:
        return None
    if insight.is_below_average:
        return PriceContext.BELOW_AVERAGE
    if insight.current_price > insight.historical_average:
        return PriceContext.ABOVE_AVERAGE
    return None


class PriceInsightService:
    def __init__(self, history: PriceHistoryService) -> None:
        self._history = history

    async def _aggregate(self, route: RouteRef) -> PriceHistoryAggregate:
        return await self._history.get_price_history_for_route(
            route.origin,
            route.destination,
            INSIGHT_WINDOW_DAYS,
            departure_date=route.departure_date,
        )

    async def get_price_insight(
        self, route: RouteRef, current_price: int
    ) -> PriceInsight | None:
        """Insight for one price, or ``None`` for under-sampled routes."""
        return build_insight(route, current_price, await self._aggregate(route))

    async def get_price_insights_for_flights(
        self, flights: Sequence[FlightResult], route: RouteRef
    ) -> list[PriceInsight | None]:
        """One history lookup shared by every flight, results in input order."""
        if not flights:
            return []
        aggregate = await self._aggregate(route)
        if aggregate.sample_count < MIN_SAMPLES:
            logger.debug(
                "No insight for %s-%s: %d samples",
                route.origin,
                route.destination,
                aggregate.sample_count,
            )
            return [None] * len(flights)
        return [build_insight(route, f.price, aggregate) for f in flights]
