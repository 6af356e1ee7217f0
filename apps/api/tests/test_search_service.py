"""Search orchestration: cache, labels, insights, recording and sessions."""

from __future__ import annotations

import pytest

from navo_core.schemas import DecisionLabel, SearchSource

from navo_api.container import build_container
from navo_api.providers import SearchProvider, SearchProviderError
from navo_api.providers.base import ProviderResult
from navo_api.schemas.search import FlightSearchQuery
from navo_api.services.search_service import SearchFailedError
from navo_api.store import MemoryStore, StoreUnavailableError

PREFIX = "mock-GRU-LIS-2026-03-10"


@pytest.fixture
def query():
    return FlightSearchQuery.model_validate(
        {"from": "GRU", "to": "LIS", "depart": "2026-03-10"}
    )


async def test_first_search_labels_and_records(container, query):
    response = await container.search.search(query, request_id="search_x")

    assert response.source is SearchSource.MOCK
    assert response.meta.count == 7
    assert not response.meta.cached
    assert response.sid is not None
    assert response.request_id == "search_x"

    labels = {
        fid: d.label for fid, d in response.decisions.items() if d.label is not None
    }
    assert labels == {
        f"{PREFIX}-2": DecisionLabel.BEST_BALANCE,
        f"{PREFIX}-6": DecisionLabel.CHEAPEST,
        f"{PREFIX}-1": DecisionLabel.FASTEST,
    }
    assert response.stats.best_balance_index == 1

    aggregate = await container.history.get_price_history_for_route("GRU", "LIS")
    assert aggregate.sample_count == 7
    assert aggregate.min_price == 2385


async def test_cached_search_does_not_record_again(container, query):
    await container.search.search(query)
    second = await container.search.search(query)

    assert second.meta.cached
    assert second.meta.count == 7
    aggregate = await container.history.get_price_history_for_route("GRU", "LIS")
    assert aggregate.sample_count == 7


async def test_insights_need_history(container, query, seed_prices):
    first = await container.search.search(query)
    assert all(f.price_insight is None for f in first.flights)

    await seed_prices("GRU", "CDG", [3000, 3100, 2900, 3050, 2950])
    cdg = FlightSearchQuery.model_validate(
        {"from": "GRU", "to": "CDG", "depart": "2026-03-10"}
    )
    response = await container.search.search(cdg)

    insight = response.flights[0].price_insight
    assert insight is not None
    assert insight.sample_count == 5
    assert insight.historical_average == 3000


async def test_session_and_flights_are_stored(container, query):
    response = await container.search.search(query)

    session = await container.sessions.get_session(response.sid)
    assert session["params"]["from"] == "GRU"
    assert len(session["flights"]) == 7

    stored = await container.sessions.get_flight(f"{PREFIX}-3")
    assert stored.sid == response.sid
    assert stored.flight.price == 2601
    assert stored.search_context["depart"] == "2026-03-10"


class _Provider(SearchProvider):
    source = SearchSource.AMADEUS

    def __init__(self, *, error: SearchProviderError | None = None) -> None:
        self.error = error

    async def search(self, query):
        if self.error is not None:
            raise self.error
        return ProviderResult(flights=[])


async def test_provider_failure_raises(settings, store, clock, query):
    error = SearchProviderError("PROVIDER_UNAVAILABLE", "timeout")
    container = build_container(
        settings, store=store, provider=_Provider(error=error), clock=clock
    )

    with pytest.raises(SearchFailedError) as exc_info:
        await container.search.search(query)
    assert exc_info.value.code == "PROVIDER_UNAVAILABLE"


async def test_empty_result_is_not_an_error(settings, store, clock, query):
    container = build_container(
        settings, store=store, provider=_Provider(), clock=clock
    )

    response = await container.search.search(query)

    assert response.flights == []
    assert response.decisions == {}
    assert response.stats is None
    assert response.sid is None
    assert response.source is SearchSource.AMADEUS


class _ReadOnlyStore(MemoryStore):
    async def get_json(self, key):
        raise StoreUnavailableError("down")

    async def set_json(self, key, value, ttl=None):
        raise StoreUnavailableError("down")


async def test_store_failures_do_not_fail_search(settings, clock, query):
    container = build_container(
        settings, store=_ReadOnlyStore(clock=clock), clock=clock
    )

    response = await container.search.search(query)

    assert response.meta.count == 7
    assert response.sid is None
    assert not response.meta.cached
