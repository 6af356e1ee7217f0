"""Shared fixtures for ranking tests."""

from __future__ import annotations

import pytest

from navo_core.schemas import FlightResult


@pytest.fixture
def make_flight():
    """Factory fixture for FlightResult instances with sensible defaults."""
    counter = iter(range(1, 1000))

    def _make(
        price: int,
        duration: str = "10h",
        *,
        flight_id: str | None = None,
        airline: str = "latam",
    ) -> FlightResult:
        return FlightResult(
            id=flight_id or f"flight-{next(counter)}",
            airline=airline,
            airline_code="LA",
            departure="22:30",
            arrival="11:15",
            duration=duration,
            stops="direto",
            price=price,
            offers_count=1,
        )

    return _make
