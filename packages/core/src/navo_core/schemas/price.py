"""Price history aggregates and derived insights."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003

from pydantic import Field

from .base import CamelModel


class RouteRef(CamelModel):
    """Origin/destination pair, optionally pinned to a departure date."""

    origin: str = Field(min_length=3, max_length=3)
    destination: str = Field(min_length=3, max_length=3)
    departure_date: date | None = None


class PriceHistoryAggregate(CamelModel):
    """Statistics over the samples of one or more route-month buckets.

    ``min_price``, ``average_price`` and ``max_price`` are ``None`` whenever
    ``sample_count`` is zero; an empty window is never reported as a price.
    """

    route_key: str
    sample_count: int = Field(ge=0)
    min_price: int | None = None
    average_price: int | None = None
    max_price: int | None = None
    window_start: datetime
    window_end: datetime
    last_updated: datetime | None = None

    @property
    def has_data(self) -> bool:
        return self.sample_count > 0


class PriceInsight(CamelModel):
    """Comparison of a current price against recorded history."""

    route: RouteRef
    current_price: int
    historical_average: int
    lowest_30_days: int
    highest_30_days: int
    price_difference: int
    percentage_difference: int
    is_below_average: bool
    is_lowest_recent: bool
    sample_count: int
