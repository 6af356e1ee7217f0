"""Redis store against fakeredis."""

from __future__ import annotations

import fakeredis
import pytest

from navo_api.store import RedisStore

pytestmark = [pytest.mark.redis]


@pytest.fixture
async def redis_store():
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    store = RedisStore(client)
    yield store
    await client.flushall()
    await store.close()


async def test_json_roundtrip(redis_store):
    await redis_store.set_json("k", {"a": [1, 2]}, ttl=30)

    assert await redis_store.get_json("k") == {"a": [1, 2]}
    assert 0 < await redis_store.ttl("k") <= 30
    assert await redis_store.get_json("missing") is None


async def test_ttl_none_for_persistent_key(redis_store):
    await redis_store.set_json("k", 1)
    assert await redis_store.ttl("k") is None
    assert await redis_store.ttl("missing") is None


async def test_append_sample_sets_expiry_and_counts(redis_store):
    assert await redis_store.append_sample("s", "a", 10, ttl=100) == 1
    assert await redis_store.append_sample("s", "b", 20, ttl=100) == 2

    assert await redis_store.samples_between("s", 0, float("inf")) == ["a", "b"]
    assert await redis_store.samples_between("s", 15, 20) == ["b"]
    assert 0 < await redis_store.ttl("s") <= 100


async def test_append_sample_trims_samples_older_than_ttl(redis_store):
    await redis_store.append_sample("s", "a", 0, ttl=60)
    await redis_store.append_sample("s", "b", 50, ttl=60)

    assert await redis_store.append_sample("s", "c", 110, ttl=60) == 2
    assert await redis_store.samples_between("s", 0, float("inf")) == ["b", "c"]


async def test_sets(redis_store):
    await redis_store.add_member("idx", "x", ttl=60)
    await redis_store.add_member("idx", "y", ttl=60)

    assert await redis_store.members("idx") == {"x", "y"}
    assert await redis_store.ttl("idx") is not None


async def test_hit_counter_creates_then_increments(redis_store):
    count, seconds_left = await redis_store.hit_counter("c", 60)
    assert count == 1
    assert 0 < seconds_left <= 60

    count, _ = await redis_store.hit_counter("c", 60)
    assert count == 2


async def test_delete_and_exists(redis_store):
    await redis_store.set_json("k", 1)
    assert await redis_store.exists("k")
    await redis_store.delete("k")
    assert not await redis_store.exists("k")


async def test_ping(redis_store):
    assert await redis_store.ping() is True
