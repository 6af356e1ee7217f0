"""Partner click tracking."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..dependencies import RequestIdDep
from ..logging_config import RequestLogger
from ..schemas.common import FieldError
from ..schemas.tracking import PartnerClickEvent, TrackResponse
from .flights import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/track", tags=["tracking"])


@router.post("/partner-click", response_model=TrackResponse)
async def partner_click(
    request: Request, request_id: RequestIdDep
) -> TrackResponse | JSONResponse:
    """Log a click-through to a booking partner."""
    try:
        event = PartnerClickEvent.model_validate(await request.json())
    except ValueError as exc:
        # ValidationError is a ValueError; so is malformed JSON
        errors = (
            [
                FieldError(
                    field=".".join(str(p) for p in err["loc"]) or "body",
                    message=err["msg"],
                )
                for err in exc.errors()
            ]
            if isinstance(exc, ValidationError)
            else [FieldError(field="body", message="Malformed JSON")]
        )
        return error_response(
            400, "INVALID_BODY", "Invalid click payload", request_id, errors=errors
        )

    RequestLogger(logger, request_id).info(
        "PARTNER_CLICK",
        partner=event.partner,
        flight_id=event.flight_id,
        route=f"{event.route.origin.upper()}-{event.route.destination.upper()}",
        client_request_id=event.request_id,
        sid=event.sid,
        clicked_at=event.ts.isoformat(),
    )
    return TrackResponse(success=True, request_id=request_id)
