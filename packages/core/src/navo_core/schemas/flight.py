"""Flight offer DTO shared by providers, ranking and the API."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from .base import CamelModel
from .price import PriceInsight  # noqa: TC001


class FlightResult(CamelModel):
    """One bookable offer as shown in a result list.

    ``duration`` is display text ("10h 45min"); ranking parses it back into
    minutes. Prices are whole BRL.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    airline: str
    airline_code: str
    departure: str
    arrival: str
    duration: str
    stops: str
    price: int = Field(ge=0)
    offers_count: int = 1
    co2: str | None = None
    stops_cities: list[str] | None = None
    next_day_arrival: bool | None = None
    price_insight: PriceInsight | None = None
