"""Partner click tracking payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import Field

from navo_core.schemas import CamelModel


class TrackedRoute(CamelModel):
    origin: str = Field(alias="from", min_length=3, max_length=3)
    destination: str = Field(alias="to", min_length=3, max_length=3)


class PartnerClickEvent(CamelModel):
    partner: str = Field(min_length=1, max_length=64)
    flight_id: str = Field(min_length=1, max_length=128)
    route: TrackedRoute
    ts: datetime
    request_id: str | None = None
    sid: str | None = None


class TrackResponse(CamelModel):
    success: bool
    request_id: str
