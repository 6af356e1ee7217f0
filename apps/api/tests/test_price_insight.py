"""Price insights are derived from recorded samples only."""

from __future__ import annotations

from datetime import date

import pytest

from navo_core.schemas import PriceContext, RouteRef

from navo_api.services.price_insight import PriceInsightService, insight_label

ROUTE = RouteRef(origin="GRU", destination="LIS")
HISTORY = [3000, 3200, 2800, 3100, 2900]


@pytest.fixture
def insights(history):
    return PriceInsightService(history)


async def test_no_insight_below_min_samples(insights, seed_prices):
    await seed_prices("GRU", "LIS", HISTORY[:4])
    assert await insights.get_price_insight(ROUTE, 2500) is None


async def test_below_average_and_lowest(insights, seed_prices):
    await seed_prices("GRU", "LIS", HISTORY)

    insight = await insights.get_price_insight(ROUTE, 2700)

    assert insight.historical_average == 3000
    assert insight.lowest_30_days == 2800
    assert insight.highest_30_days == 3200
    assert insight.price_difference == 300
    assert insight.percentage_difference == 10
    assert insight.is_below_average
    assert insight.is_lowest_recent
    assert insight.sample_count == 5
    assert insight_label(insight) is PriceContext.BELOW_AVERAGE


async def test_small_difference_has_no_label(insights, seed_prices):
    await seed_prices("GRU", "LIS", HISTORY)

    insight = await insights.get_price_insight(ROUTE, 3090)

    assert insight.price_difference == -90
    assert insight.percentage_difference == 3
    assert not insight.is_below_average
    assert insight_label(insight) is None


async def test_above_average(insights, seed_prices):
    await seed_prices("GRU", "LIS", HISTORY)

    insight = await insights.get_price_insight(ROUTE, 3300)

    assert insight.percentage_difference == 10
    assert not insight.is_lowest_recent
    assert insight_label(insight) is PriceContext.ABOVE_AVERAGE


async def test_departure_date_reads_one_month(insights, seed_prices):
    await seed_prices("GRU", "LIS", HISTORY, date(2026, 3, 1))
    await seed_prices("GRU", "LIS", [100], date(2026, 4, 1))

    march = RouteRef(origin="GRU", destination="LIS", departure_date=date(2026, 3, 20))
    insight = await insights.get_price_insight(march, 2700)
    assert insight.sample_count == 5
    assert insight.lowest_30_days == 2800


async def test_insights_for_flights_keep_order(insights, seed_prices, make_flight):
    await seed_prices("GRU", "LIS", HISTORY)
    flights = [make_flight(3300), make_flight(2700), make_flight(3000)]

    results = await insights.get_price_insights_for_flights(flights, ROUTE)

    assert [r.current_price for r in results] == [3300, 2700, 3000]


async def test_insights_for_flights_without_history(insights, make_flight):
    flights = [make_flight(3300), make_flight(2700)]
    assert await insights.get_price_insights_for_flights(flights, ROUTE) == [
        None,
        None,
    ]
    assert await insights.get_price_insights_for_flights([], ROUTE) == []
