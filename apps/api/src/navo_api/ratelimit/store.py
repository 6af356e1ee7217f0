"""Limiter on top of a shared :class:`~navo_api.store.Store`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..store import StoreError
from ..store.keys import rate_limit_key
from .base import RateLimiter, RateLimitResult, reset_after

if TYPE_CHECKING:
    from ..config import RateLimitPolicy
    from ..store import Store

logger = logging.getLogger(__name__)


class StoreRateLimiter(RateLimiter):
    """Shared counters so every instance enforces the same budget.

    The counter is created and incremented atomically by the store. When
    the store is unreachable the request is allowed and a warning logged.
    """

    name = "store"

    def __init__(self, store: Store) -> None:
        self._store = store

    async def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        try:
            count, seconds_left = await self._store.hit_counter(
                rate_limit_key(key), policy.window_seconds
            )
        except StoreError as exc:
            logger.warning("Rate limit store unavailable, allowing %s: %s", key, exc)
            return RateLimitResult(
                True, policy.limit, policy.limit, policy.window_seconds
            )

        return RateLimitResult(
            allowed=count <= policy.limit,
            limit=policy.limit,
            remaining=max(0, policy.limit - count),
            reset_seconds=reset_after(seconds_left),
        )
