"""Holiday-driven route suggestions for a given origin."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from navo_core.data.airports import city_for_airport
from navo_core.data.destinations import pick_destinations_for_holiday
from navo_core.data.holidays import get_next_holiday_windows
from navo_core.schemas import HolidayRef, OriginRef, RouteCardsMeta, SmartRouteCard

from ..schemas.routes import SmartRoutesResponse
from ..store import StoreError
from .price_insight import INSIGHT_WINDOW_DAYS, MIN_SAMPLES

if TYPE_CHECKING:
    from collections.abc import Callable

    from navo_core.data.destinations import SuggestedDestination
    from navo_core.data.holidays import HolidayWindow

    from .price_history import PriceHistoryService

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN = "GRU"
MAX_HOLIDAYS = 4
DESTINATIONS_PER_HOLIDAY = 3

_IATA_RE = re.compile(r"^[A-Z]{3}$")


def normalize_origin(code: str | None) -> str:
    code = (code or "").strip().upper()
    return code if _IATA_RE.match(code) else DEFAULT_ORIGIN


class SmartRoutesService:
    def __init__(
        self,
        history: PriceHistoryService,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._history = history
        self._clock = clock

    async def _card(
        self, origin: str, window: HolidayWindow, dest: SuggestedDestination
    ) -> SmartRouteCard:
        sample_count = 0
        price = None
        try:
            aggregate = await self._history.get_price_history_for_route(
                origin,
                dest.code,
                INSIGHT_WINDOW_DAYS,
                departure_date=window.start_date,
            )
        except StoreError as exc:
            logger.warning(
                "SMART_ROUTE_PRICE_FETCH_FAILED %s-%s (%s): %s",
                origin,
                dest.code,
                window.key,
                exc,
            )
        else:
            sample_count = aggregate.sample_count
            if sample_count >= MIN_SAMPLES:
                price = aggregate.min_price

        return SmartRouteCard(
            id=f"{window.key}-{dest.code}",
            origin=origin,
            origin_city=city_for_airport(origin),
            destination=dest.code,
            label_city=dest.city,
            country=dest.country,
            holiday_key=window.key,
            holiday_name=window.name,
            depart_date=window.start_date,
            return_date=window.end_date,
            trip_days=window.days,
            price=price,
            sample_count=sample_count,
            has_reliable_data=price is not None,
        )

    async def get_smart_popular_routes(
        self, origin_code: str | None = None
    ) -> SmartRoutesResponse:
        """Up to 4 upcoming holidays, 3 destinations each."""
        origin = normalize_origin(origin_code)
        now = datetime.fromtimestamp(self._clock(), UTC)
        windows = get_next_holiday_windows(now.date(), MAX_HOLIDAYS)

        # Order follows the holiday calendar, then destination rank
        routes: list[SmartRouteCard] = list(
            await asyncio.gather(
                *(
                    self._card(origin, window, dest)
                    for window in windows
                    for dest in pick_destinations_for_holiday(
                        window, origin, DESTINATIONS_PER_HOLIDAY
                    )
                )
            )
        )

        logger.info(
            "SMART_ROUTES_COMPLETE origin=%s routes=%d with_price=%d",
            origin,
            len(routes),
            sum(1 for r in routes if r.price is not None),
        )
        return SmartRoutesResponse(
            routes=routes,
            origin=OriginRef(code=origin, city=city_for_airport(origin)),
            holidays=[
                HolidayRef(
                    key=w.key, name=w.name, start_date=w.start_date, end_date=w.end_date
                )
                for w in windows
            ],
            meta=RouteCardsMeta(fetched_at=now, min_samples_required=MIN_SAMPLES),
        )
