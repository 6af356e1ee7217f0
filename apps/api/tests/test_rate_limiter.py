"""Fixed-window limiter: both backends make the same decisions."""

from __future__ import annotations

import pytest

from navo_api.config import RateLimitPolicy
from navo_api.ratelimit import (
    MemoryRateLimiter,
    StoreRateLimiter,
    hash_identifier,
    limiter_key,
)
from navo_api.ratelimit.base import RateLimitResult, reset_after
from navo_api.store import StoreUnavailableError

POLICY = RateLimitPolicy(limit=3, window_seconds=60)


@pytest.fixture(params=["memory", "store"])
def limiter(request, clock, store):
    if request.param == "memory":
        return MemoryRateLimiter(clock=clock)
    return StoreRateLimiter(store)


async def test_allows_up_to_limit_then_rejects(limiter):
    results = [await limiter.check("k", POLICY) for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert all(r.limit == 3 for r in results)
    assert results[-1].reset_seconds == 60


async def test_window_resets_strictly_after_boundary(limiter, clock):
    for _ in range(3):
        await limiter.check("k", POLICY)

    clock.advance(60)
    assert not (await limiter.check("k", POLICY)).allowed

    clock.advance(0.5)
    result = await limiter.check("k", POLICY)
    assert result.allowed
    assert result.remaining == 2


async def test_reset_seconds_rounds_up(limiter, clock):
    await limiter.check("k", POLICY)
    clock.advance(59.2)
    result = await limiter.check("k", POLICY)
    assert result.reset_seconds == 1


async def test_keys_are_independent(limiter):
    for _ in range(3):
        await limiter.check("a", POLICY)

    assert not (await limiter.check("a", POLICY)).allowed
    assert (await limiter.check("b", POLICY)).allowed


async def test_memory_limiter_reset(clock):
    limiter = MemoryRateLimiter(clock=clock)
    for _ in range(3):
        await limiter.check("k", POLICY)
    limiter.reset()
    assert (await limiter.check("k", POLICY)).allowed


class _BrokenStore:
    async def hit_counter(self, key, window_seconds):
        raise StoreUnavailableError("connection refused")


async def test_store_limiter_fails_open():
    limiter = StoreRateLimiter(_BrokenStore())
    result = await limiter.check("k", POLICY)
    assert result.allowed
    assert result.remaining == 3


def test_result_headers():
    ok = RateLimitResult(True, 10, 7, 42)
    assert ok.headers() == {
        "X-RateLimit-Limit": "10",
        "X-RateLimit-Remaining": "7",
        "X-RateLimit-Reset": "42",
    }
    rejected = RateLimitResult(False, 10, 0, 42)
    assert rejected.headers()["Retry-After"] == "42"


@pytest.mark.parametrize(
    ("seconds", "expected"), [(0, 1), (0.2, 1), (1.0, 1), (1.01, 2), (59.9, 60)]
)
def test_reset_after(seconds, expected):
    assert reset_after(seconds) == expected


def test_limiter_key_hashes_ip():
    key = limiter_key("search", "203.0.113.9", "salt")
    policy, digest = key.split(":")
    assert policy == "search"
    assert len(digest) == 16
    assert "203.0.113.9" not in key
    assert digest == hash_identifier("203.0.113.9", "salt")
    assert digest != hash_identifier("203.0.113.9", "other")
