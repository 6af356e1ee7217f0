"""In-process fixed-window limiter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import RateLimiter, RateLimitResult, reset_after

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..config import RateLimitPolicy

_SWEEP_EVERY = 1000


@dataclass
class _Bucket:
    count: int
    window_start: float
    window_seconds: int

    def expired(self, now: float) -> bool:
        return now > self.window_start + self.window_seconds


class MemoryRateLimiter(RateLimiter):
    """Counters live in this process and reset on restart.

    Rejected requests do not advance the counter.
    """

    name = "memory"

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._buckets: dict[str, _Bucket] = {}
        self._checks = 0

    async def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        now = self._clock()
        self._checks += 1
        if self._checks % _SWEEP_EVERY == 0:
            self._sweep(now)

        bucket = self._buckets.get(key)
        if bucket is None or bucket.expired(now):
            bucket = _Bucket(0, now, policy.window_seconds)
            self._buckets[key] = bucket

        reset = reset_after(bucket.window_start + bucket.window_seconds - now)
        if bucket.count >= policy.limit:
            return RateLimitResult(False, policy.limit, 0, reset)

        bucket.count += 1
        return RateLimitResult(True, policy.limit, policy.limit - bucket.count, reset)

    def _sweep(self, now: float) -> None:
        for key in [k for k, b in self._buckets.items() if b.expired(now)]:
            del self._buckets[key]

    def reset(self) -> None:
        self._buckets.clear()
