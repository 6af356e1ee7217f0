"""Popular route cards: prices only from reliable history."""

from __future__ import annotations

import pytest

from navo_api.services.popular_routes import (
    DEFAULT_LIMIT,
    PopularRoutesService,
    clamp_limit,
)
from navo_api.store import StoreUnavailableError

RELIABLE = [1900, 2100, 2000, 2300, 1850]


@pytest.fixture
def service(history, clock):
    return PopularRoutesService(history, clock=clock)


@pytest.mark.parametrize(
    ("limit", "expected"), [(None, 6), (0, 1), (-3, 1), (4, 4), (12, 12), (40, 12)]
)
def test_clamp_limit(limit, expected):
    assert clamp_limit(limit) == expected


async def test_no_history_means_no_prices(service):
    response = await service.get_popular_routes_for_api()

    assert len(response.routes) == DEFAULT_LIMIT
    assert [r.id for r in response.routes] == [
        "GRU-LIS",
        "GRU-MAD",
        "GRU-CDG",
        "GRU-LHR",
        "GRU-MIA",
        "GRU-JFK",
    ]
    assert all(r.price is None for r in response.routes)
    assert all(not r.has_reliable_data for r in response.routes)
    assert response.meta.min_samples_required == 5
    assert response.routes[0].route_label == "são paulo → lisboa"


async def test_reliable_routes_come_first(service, seed_prices):
    await seed_prices("GIG", "REC", RELIABLE)
    await seed_prices("GRU", "MAD", RELIABLE[:4])

    response = await service.get_popular_routes_for_api()

    first = response.routes[0]
    assert first.id == "GIG-REC"
    assert first.price == 1850
    assert first.sample_count == 5
    assert first.has_reliable_data
    assert first.last_updated is not None

    mad = next(r for r in response.routes if r.id == "GRU-MAD")
    assert mad.price is None
    assert mad.sample_count == 4
    assert [r.id for r in response.routes[1:]] == [
        "GRU-LIS",
        "GRU-MAD",
        "GRU-CDG",
        "GRU-LHR",
        "GRU-MIA",
    ]


async def test_only_limit_times_two_candidates_are_considered(service, seed_prices):
    await seed_prices("GIG", "REC", RELIABLE)

    response = await service.get_popular_routes_for_api(limit=2)

    assert [r.id for r in response.routes] == ["GRU-LIS", "GRU-MAD"]


class _FlakyHistory:
    def __init__(self, inner, failing: str) -> None:
        self._inner = inner
        self._failing = failing

    async def get_price_history_for_route(self, origin, destination, *args, **kw):
        if destination == self._failing:
            raise StoreUnavailableError("timeout")
        return await self._inner.get_price_history_for_route(
            origin, destination, *args, **kw
        )


async def test_failed_route_degrades_to_no_price(history, seed_prices, clock):
    await seed_prices("GRU", "LIS", RELIABLE)
    service = PopularRoutesService(_FlakyHistory(history, "LIS"), clock=clock)

    response = await service.get_popular_routes_for_api()

    lis = next(r for r in response.routes if r.id == "GRU-LIS")
    assert lis.price is None
    assert lis.sample_count == 0
    assert len(response.routes) == DEFAULT_LIMIT
