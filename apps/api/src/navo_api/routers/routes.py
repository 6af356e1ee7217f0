"""Popular and holiday-driven route suggestions."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from ..dependencies import PopularRoutesDep, RequestIdDep, SmartRoutesDep
from ..logging_config import RequestLogger
from ..schemas.routes import PopularRoutesResponse, SmartRoutesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


def _parse_limit(raw: str | None) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


@router.get(
    "/popular",
    response_model=PopularRoutesResponse,
    response_model_exclude_none=True,
)
async def popular_routes(
    service: PopularRoutesDep,
    request_id: RequestIdDep,
    limit: Annotated[str | None, Query()] = None,
) -> PopularRoutesResponse:
    """Curated routes; ``limit`` is clamped to 1..12 (default 6)."""
    RequestLogger(logger, request_id).info("POPULAR_ROUTES_REQUEST", limit=limit)
    response = await service.get_popular_routes_for_api(_parse_limit(limit))
    return response.model_copy(update={"request_id": request_id})


@router.get(
    "/smart-popular",
    response_model=SmartRoutesResponse,
    response_model_exclude_none=True,
)
async def smart_popular_routes(
    service: SmartRoutesDep,
    request_id: RequestIdDep,
    origin: Annotated[str | None, Query(alias="from")] = None,
) -> SmartRoutesResponse:
    """Holiday suggestions from ``from`` (default GRU)."""
    RequestLogger(logger, request_id).info("SMART_ROUTES_REQUEST", origin=origin)
    response = await service.get_smart_popular_routes(origin)
    return response.model_copy(update={"request_id": request_id})
