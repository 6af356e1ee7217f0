"""Flight detail response schema."""

from __future__ import annotations

from typing import Any, Literal

from navo_core.schemas import CamelModel, FlightResult


class FlightDetailResponse(CamelModel):
    flight: FlightResult
    source: Literal["store", "session", "refetch"]
    search_context: dict[str, Any] | None = None
    request_id: str | None = None
