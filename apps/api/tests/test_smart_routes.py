"""Holiday-driven suggestions with data-backed prices."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from navo_api.services.smart_routes import SmartRoutesService, normalize_origin
from navo_api.store import StoreUnavailableError


@pytest.fixture
def service(history, clock):
    return SmartRoutesService(history, clock=clock)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "GRU"), ("", "GRU"), ("gig", "GIG"), (" bsb ", "BSB"), ("XX1", "GRU")],
)
def test_normalize_origin(raw, expected):
    assert normalize_origin(raw) == expected


async def test_next_holidays_and_cards(service):
    response = await service.get_smart_popular_routes()

    assert response.origin.code == "GRU"
    assert response.origin.city == "são paulo"
    assert [h.key for h in response.holidays] == [
        "verao-2026",
        "carnaval-2026",
        "pascoa-2026",
        "tiradentes-2026",
    ]
    assert len(response.routes) == 12
    assert all(r.price is None and r.sample_count == 0 for r in response.routes)

    carnaval = [r for r in response.routes if r.holiday_key == "carnaval-2026"]
    assert len(carnaval) == 3
    assert carnaval[0].depart_date == date(2026, 2, 13)
    assert carnaval[0].return_date == date(2026, 2, 18)
    assert carnaval[0].trip_days == 5
    assert carnaval[0].id == f"carnaval-2026-{carnaval[0].destination}"


async def test_origin_is_never_a_destination(service):
    response = await service.get_smart_popular_routes("gig")

    assert response.origin.code == "GIG"
    assert all(r.origin == "GIG" for r in response.routes)
    assert all(r.destination not in ("GIG", "SDU") for r in response.routes)


async def test_card_price_needs_reliable_samples(service, seed_prices):
    first = (await service.get_smart_popular_routes()).routes[0]
    await seed_prices("GRU", first.destination, [900, 950, 1000], first.depart_date)

    card = (await service.get_smart_popular_routes()).routes[0]
    assert card.sample_count == 3
    assert card.price is None
    assert not card.has_reliable_data

    await seed_prices("GRU", first.destination, [880, 1020], first.depart_date)
    card = (await service.get_smart_popular_routes()).routes[0]
    assert card.price == 880
    assert card.has_reliable_data


class _DownHistory:
    async def get_price_history_for_route(self, *args, **kwargs):
        raise StoreUnavailableError("down")


async def test_store_failure_yields_cards_without_prices(clock):
    service = SmartRoutesService(_DownHistory(), clock=clock)

    response = await service.get_smart_popular_routes()

    assert len(response.routes) == 12
    assert all(r.price is None for r in response.routes)


class _GatedHistory:
    """Answers only once every card lookup is in flight at the same time."""

    def __init__(self, history, parties):
        self._history = history
        self._barrier = asyncio.Barrier(parties)

    async def get_price_history_for_route(self, *args, **kwargs):
        await self._barrier.wait()
        return await self._history.get_price_history_for_route(*args, **kwargs)


@pytest.mark.timeout(5)
async def test_card_lookups_run_concurrently(history, clock):
    service = SmartRoutesService(_GatedHistory(history, 12), clock=clock)

    response = await service.get_smart_popular_routes()

    assert [r.holiday_key for r in response.routes] == [
        key
        for key in ("verao-2026", "carnaval-2026", "pascoa-2026", "tiradentes-2026")
        for _ in range(3)
    ]
