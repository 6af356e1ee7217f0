"""Observed-price history per route and departure month.

Each route-month bucket is a sorted set of JSON samples scored by
observation time. Appends are atomic in the store, so concurrent searches
for the same route never lose samples. A per-route index set records which
month buckets exist, letting trailing-window reads cover every departure
month that received recent samples.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from navo_core.schemas import PriceHistoryAggregate

from ..store.keys import (
    PRICE_HISTORY_PREFIX,
    month_of,
    price_history_index_key,
    price_history_key,
    route_id,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date

    from navo_core.schemas import FlightResult

    from ..store import Store

logger = logging.getLogger(__name__)

PRICE_HISTORY_TTL = 30 * 24 * 60 * 60  # also the age limit of a kept sample
DEFAULT_WINDOW_DAYS = 30
_LOG_EVERY = 100


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _to_datetime(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, UTC)


class PriceHistoryService:
    """Record prices and aggregate them over a trailing window."""

    def __init__(
        self, store: Store, *, clock: Callable[[], float] = time.time
    ) -> None:
        self._store = store
        self._clock = clock

    async def record_price(
        self, origin: str, destination: str, departure_date: date, price: float
    ) -> bool:
        """Append one sample; returns ``False`` when the input is ignored."""
        if price <= 0 or not origin or not destination:
            return False

        now = self._clock()
        key = price_history_key(origin, destination, month_of(departure_date))
        member = json.dumps(
            {"p": _round_half_up(price), "ts": now, "id": uuid.uuid4().hex[:12]},
            separators=(",", ":"),
        )
        size = await self._store.append_sample(key, member, now, PRICE_HISTORY_TTL)
        await self._store.add_member(
            price_history_index_key(origin, destination), key, PRICE_HISTORY_TTL
        )
        if size == 1 or size % _LOG_EVERY == 0:
            logger.info("PRICE_HISTORY_RECORDED key=%s samples=%d", key, size)
        return True

    async def record_search_prices(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        flights: Sequence[FlightResult],
    ) -> int:
        """Record every flight price; failures are logged, never raised."""
        results = await asyncio.gather(
            *(
                self.record_price(origin, destination, departure_date, f.price)
                for f in flights
            ),
            return_exceptions=True,
        )
        recorded = 0
        for flight, result in zip(flights, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Failed to record price for %s on %s: %s",
                    flight.id,
                    route_id(origin, destination),
                    result,
                )
            elif result:
                recorded += 1
        return recorded

    async def get_price_history(self, route_key: str) -> PriceHistoryAggregate | None:
        """Aggregate of a whole bucket, or ``None`` when it does not exist.

        ``route_key`` is ``ORIGIN-DEST-YYYY-MM`` (the store prefix is optional).
        """
        prefix = f"{PRICE_HISTORY_PREFIX}:"
        key = route_key if route_key.startswith(prefix) else prefix + route_key
        samples = _parse(await self._store.samples_between(key, 0, float("inf")))
        if not samples:
            return None
        timestamps = [ts for _, ts in samples]
        return _aggregate(
            key.removeprefix(prefix), samples, min(timestamps), max(timestamps)
        )

    async def get_price_history_for_route(
        self,
        origin: str,
        destination: str,
        window_days: int = DEFAULT_WINDOW_DAYS,
        departure_date: date | None = None,
    ) -> PriceHistoryAggregate:
        """Statistics over samples observed in the last ``window_days``.

        With ``departure_date`` only that month's bucket is read; otherwise
        every indexed bucket for the route. No samples means
        ``sample_count == 0`` and no prices.
        """
        now = self._clock()
        start = now - window_days * 24 * 60 * 60
        if departure_date is not None:
            month = month_of(departure_date)
            keys = [price_history_key(origin, destination, month)]
            label = f"{route_id(origin, destination)}-{month}"
        else:
            index = price_history_index_key(origin, destination)
            keys = sorted(await self._store.members(index))
            label = route_id(origin, destination)

        buckets = await asyncio.gather(
            *(self._store.samples_between(key, start, now) for key in keys)
        )
        samples = [sample for bucket in buckets for sample in _parse(bucket)]
        return _aggregate(label, samples, start, now)


def _parse(members: Iterable[str]) -> list[tuple[int, float]]:
    samples = []
    for raw in members:
        try:
            data = json.loads(raw)
            samples.append((int(data["p"]), float(data["ts"])))
        except (ValueError, KeyError, TypeError):
            logger.debug("Skipping malformed price sample: %r", raw)
    return samples


def _aggregate(
    route_key: str,
    samples: Sequence[tuple[int, float]],
    window_start: float,
    window_end: float,
) -> PriceHistoryAggregate:
    if not samples:
        return PriceHistoryAggregate(
            route_key=route_key,
            sample_count=0,
            window_start=_to_datetime(window_start),
            window_end=_to_datetime(window_end),
        )
    prices = [p for p, _ in samples]
    return PriceHistoryAggregate(
        route_key=route_key,
        sample_count=len(prices),
        min_price=min(prices),
        average_price=_round_half_up(sum(prices) / len(prices)),
        max_price=max(prices),
        window_start=_to_datetime(window_start),
        window_end=_to_datetime(window_end),
        last_updated=_to_datetime(max(ts for _, ts in samples)),
    )
