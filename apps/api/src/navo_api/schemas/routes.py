"""Popular and smart route responses."""

from __future__ import annotations

from navo_core.schemas import (
    CamelModel,
    HolidayRef,
    OriginRef,
    PopularRouteCard,
    RouteCardsMeta,
    SmartRouteCard,
)


class PopularRoutesResponse(CamelModel):
    routes: list[PopularRouteCard]
    meta: RouteCardsMeta
    request_id: str | None = None


class SmartRoutesResponse(CamelModel):
    routes: list[SmartRouteCard]
    origin: OriginRef
    holidays: list[HolidayRef]
    meta: RouteCardsMeta
    request_id: str | None = None
