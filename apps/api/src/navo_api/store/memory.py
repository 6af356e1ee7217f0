"""In-process store for development and single-instance deployments."""

from __future__ import annotations

import json
import logging
import time
from bisect import bisect_left, insort
from dataclasses import dataclass
from operator import itemgetter
from typing import TYPE_CHECKING, Any

from .base import Store, StoreError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10_000


@dataclass
class _Entry:
    value: Any
    expires_at: float | None


class MemoryStore(Store):
    """Dict-backed store with per-key expiry.

    A key expires once ``now > expires_at``, matching the window boundary
    used by the in-memory rate limiter. Values are stored JSON-encoded so
    callers never share mutable state with the store.
    """

    name = "memory"

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        max_entries: int = MAX_ENTRIES,
    ) -> None:
        self._clock = clock
        self._max_entries = max_entries
        self._data: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._data)

    def _live(self, key: str) -> _Entry | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self._clock() > entry.expires_at:
            del self._data[key]
            return None
        return entry

    def _typed(self, key: str, kind: type) -> _Entry | None:
        entry = self._live(key)
        if entry is not None and not isinstance(entry.value, kind):
            msg = f"Key {key!r} holds a {type(entry.value).__name__}"
            raise StoreError(msg)
        return entry

    def _expiry(self, ttl: int | None) -> float | None:
        return None if ttl is None else self._clock() + ttl

    def _put(self, key: str, entry: _Entry) -> None:
        if key not in self._data and len(self._data) >= self._max_entries:
            self._evict()
        self._data[key] = entry

    def _evict(self) -> None:
        now = self._clock()
        for key in [
            k
            for k, e in self._data.items()
            if e.expires_at is not None and now > e.expires_at
        ]:
            del self._data[key]
        if len(self._data) < self._max_entries:
            return
        victim = min(
            self._data,
            key=lambda k: (
                self._data[k].expires_at
                if self._data[k].expires_at is not None
                else float("inf")
            ),
        )
        del self._data[victim]
        logger.debug("Memory store full, evicted %s", victim)

    async def get_json(self, key: str) -> Any | None:
        entry = self._typed(key, str)
        return None if entry is None else json.loads(entry.value)

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._put(key, _Entry(json.dumps(value, default=str), self._expiry(ttl)))

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def exists(self, key: str) -> bool:
        return self._live(key) is not None

    async def ttl(self, key: str) -> float | None:
        entry = self._live(key)
        if entry is None or entry.expires_at is None:
            return None
        return max(entry.expires_at - self._clock(), 0.0)

    async def append_sample(
        self, key: str, member: str, score: float, ttl: int
    ) -> int:
        entry = self._typed(key, list)
        if entry is None:
            entry = _Entry([], None)
            self._put(key, entry)
        samples = entry.value
        insort(samples, (score, member))
        del samples[: bisect_left(samples, score - ttl, key=itemgetter(0))]
        entry.expires_at = self._expiry(ttl)
        return len(samples)

    async def samples_between(
        self, key: str, min_score: float, max_score: float
    ) -> list[str]:
        entry = self._typed(key, list)
        if entry is None:
            return []
        return [m for s, m in entry.value if min_score <= s <= max_score]

    async def add_member(self, key: str, member: str, ttl: int) -> None:
        entry = self._typed(key, set)
        if entry is None:
            entry = _Entry(set(), None)
            self._put(key, entry)
        entry.value.add(member)
        entry.expires_at = self._expiry(ttl)

    async def members(self, key: str) -> set[str]:
        entry = self._typed(key, set)
        return set() if entry is None else set(entry.value)

    async def hit_counter(self, key: str, window_seconds: int) -> tuple[int, float]:
        entry = self._typed(key, int)
        if entry is None:
            entry = _Entry(0, self._expiry(window_seconds))
            self._put(key, entry)
        entry.value += 1
        return entry.value, max(entry.expires_at - self._clock(), 0.0)

    async def clear(self) -> None:
        self._data.clear()
