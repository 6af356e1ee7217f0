"""Route suggestion cards for the home page."""

from __future__ import annotations

from datetime import date, datetime  # noqa: TC003

from .base import CamelModel


class RouteCardsMeta(CamelModel):
    fetched_at: datetime
    min_samples_required: int


class PopularRouteCard(CamelModel):
    """Curated route with an optional data-backed price."""

    id: str
    origin: str
    destination: str
    origin_city: str
    label_city: str
    country: str
    route_label: str
    price: int | None = None
    sample_count: int = 0
    has_reliable_data: bool = False
    last_updated: datetime | None = None


class SmartRouteCard(CamelModel):
    """Holiday-driven suggestion from a given origin."""

    id: str
    origin: str
    origin_city: str
    destination: str
    label_city: str
    country: str
    holiday_key: str
    holiday_name: str
    depart_date: date
    return_date: date
    trip_days: int
    price: int | None = None
    sample_count: int = 0
    has_reliable_data: bool = False


class OriginRef(CamelModel):
    code: str
    city: str


class HolidayRef(CamelModel):
    key: str
    name: str
    start_date: date
    end_date: date
