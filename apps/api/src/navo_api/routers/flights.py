"""Flight search and detail router."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from ..dependencies import FlightLookupDep, RequestIdDep, SearchServiceDep
from ..schemas.common import ErrorResponse, FieldError
from ..schemas.flights import FlightDetailResponse
from ..schemas.search import FlightSearchResponse, InvalidQuery, validate_search_query
from ..services.search_service import SearchFailedError
from ..store import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    request_id: str,
    errors: list[FieldError] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        code=code, message=message, errors=errors, request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=body.to_wire())


@router.get(
    "/search",
    response_model=FlightSearchResponse,
    response_model_exclude_none=True,
    responses=_ERRORS,
)
async def search_flights(
    request: Request, service: SearchServiceDep, request_id: RequestIdDep
) -> FlightSearchResponse | JSONResponse:
    """Search flights: ``from``, ``to``, ``depart`` plus optional filters."""
    result = validate_search_query(request.query_params)
    if isinstance(result, InvalidQuery):
        return error_response(
            400,
            "VALIDATION_ERROR",
            "Invalid search parameters",
            request_id,
            errors=result.errors,
        )
    try:
        return await service.search(result.query, request_id=request_id)
    except SearchFailedError as exc:
        return error_response(502, exc.code, exc.message, request_id)


@router.get(
    "/{flight_id}",
    response_model=FlightDetailResponse,
    response_model_exclude_none=True,
    responses=_ERRORS,
)
async def get_flight(
    flight_id: str,
    request: Request,
    lookup: FlightLookupDep,
    request_id: RequestIdDep,
    sid: Annotated[str | None, Query()] = None,
) -> FlightDetailResponse | JSONResponse:
    """Flight by id from the store, the session, or a repeated search."""
    try:
        found = await lookup.find(
            flight_id,
            sid=sid,
            params=request.query_params,
            request_id=request_id,
        )
    except StoreError as exc:
        logger.error("Flight lookup failed for %s: %s", flight_id, exc)
        return error_response(
            503,
            "STORE_UNAVAILABLE",
            "Flight data is temporarily unavailable",
            request_id,
        )

    if found is None:
        return error_response(
            404,
            "FLIGHT_CONTEXT_MISSING",
            "Flight not found; run the search again",
            request_id,
        )
    stored, source = found
    return FlightDetailResponse(
        flight=stored.flight,
        source=source,
        search_context=stored.search_context,
        request_id=request_id,
    )
