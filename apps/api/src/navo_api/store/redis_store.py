"""Redis-backed store for multi-instance deployments."""

from __future__ import annotations

import json
import logging
import math
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import redis.asyncio as redis

from .base import Store, StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except redis.RedisError as exc:
        msg = f"Redis {operation} failed: {exc}"
        raise StoreUnavailableError(msg) from exc


def _bound(score: float) -> float | str:
    if math.isinf(score):
        return "+inf" if score > 0 else "-inf"
    return score


class RedisStore(Store):
    """Store on top of ``redis.asyncio``; compound writes use MULTI/EXEC."""

    name = "redis"

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> RedisStore:
        client = redis.from_url(url, decode_responses=True)
        logger.info("Redis store initialised: %s", url.rsplit("@", 1)[-1])
        return cls(client)

    async def get_json(self, key: str) -> Any | None:
        with _translate_errors("GET"):
            raw = await self._client.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        with _translate_errors("SET"):
            await self._client.set(key, json.dumps(value, default=str), ex=ttl)

    async def delete(self, key: str) -> None:
        with _translate_errors("DEL"):
            await self._client.delete(key)

    async def exists(self, key: str) -> bool:
        with _translate_errors("EXISTS"):
            return bool(await self._client.exists(key))

    async def ttl(self, key: str) -> float | None:
        with _translate_errors("PTTL"):
            remaining = await self._client.pttl(key)
        # -2: missing, -1: no expiry
        if remaining < 0:
            return None
        return remaining / 1000

    async def append_sample(
        self, key: str, member: str, score: float, ttl: int
    ) -> int:
        with _translate_errors("ZADD"):
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.zadd(key, {member: score})
                pipe.zremrangebyscore(key, "-inf", f"({score - ttl}")
                pipe.expire(key, ttl)
                pipe.zcard(key)
                *_, size = await pipe.execute()
        return int(size)

    async def samples_between(
        self, key: str, min_score: float, max_score: float
    ) -> list[str]:
        with _translate_errors("ZRANGEBYSCORE"):
            members = await self._client.zrangebyscore(
                key, _bound(min_score), _bound(max_score)
            )
        return list(members)

    async def add_member(self, key: str, member: str, ttl: int) -> None:
        with _translate_errors("SADD"):
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.sadd(key, member)
                pipe.expire(key, ttl)
                await pipe.execute()

    async def members(self, key: str) -> set[str]:
        with _translate_errors("SMEMBERS"):
            return set(await self._client.smembers(key))

    async def hit_counter(self, key: str, window_seconds: int) -> tuple[int, float]:
        with _translate_errors("INCR"):
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(key, 0, ex=window_seconds, nx=True)
                pipe.incr(key)
                pipe.pttl(key)
                _, count, remaining_ms = await pipe.execute()
        return int(count), max(remaining_ms, 0) / 1000

    async def ping(self) -> bool:
        with _translate_errors("PING"):
            return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("Redis store closed")
