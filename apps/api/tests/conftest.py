"""Shared fixtures for API tests."""

from __future__ import annotations

from datetime import date

import httpx
import pytest

from navo_core.schemas import FlightResult

from navo_api.config import ApiSettings
from navo_api.container import build_container
from navo_api.main import create_app
from navo_api.providers import MockSearchProvider
from navo_api.ratelimit import MemoryRateLimiter
from navo_api.services.price_history import PriceHistoryService
from navo_api.store import MemoryStore

# 2026-01-01T00:00:00Z
START_TS = 1_767_225_600.0


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: float = START_TS) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_flight():
    """Factory fixture for FlightResult instances."""
    counter = iter(range(1, 1000))

    def _make(
        price: int, duration: str = "10h", *, flight_id: str | None = None
    ) -> FlightResult:
        return FlightResult(
            id=flight_id or f"flight-{next(counter)}",
            airline="latam",
            airline_code="LA",
            departure="22:30",
            arrival="11:15",
            duration=duration,
            stops="direto",
            price=price,
        )

    return _make


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryStore:
    return MemoryStore(clock=clock)


@pytest.fixture
def history(store: MemoryStore, clock: FakeClock) -> PriceHistoryService:
    return PriceHistoryService(store, clock=clock)


@pytest.fixture
def seed_prices(history: PriceHistoryService):
    """Record ``prices`` for a route, all observed at the current clock."""

    async def _seed(
        origin: str,
        destination: str,
        prices: list[int],
        departure_date: date = date(2026, 3, 10),
    ) -> None:
        for price in prices:
            await history.record_price(origin, destination, departure_date, price)

    return _seed


@pytest.fixture
def settings() -> ApiSettings:
    return ApiSettings(_env_file=None, log_json=False, rate_limit_salt="test-salt")


@pytest.fixture
def container(settings, store, clock):
    return build_container(
        settings,
        store=store,
        provider=MockSearchProvider(),
        rate_limiter=MemoryRateLimiter(clock=clock),
        clock=clock,
    )


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
