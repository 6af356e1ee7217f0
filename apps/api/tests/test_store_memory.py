"""In-memory store semantics: expiry, samples, sets and counters."""

from __future__ import annotations

import pytest

from navo_api.store import MemoryStore, StoreError


async def test_json_roundtrip_returns_copies(store):
    value = {"flights": [{"id": "a"}]}
    await store.set_json("k", value)
    value["flights"].clear()

    assert await store.get_json("k") == {"flights": [{"id": "a"}]}
    assert await store.get_json("missing") is None


async def test_key_expires_strictly_after_ttl(store, clock):
    await store.set_json("k", 1, ttl=10)

    clock.advance(10)
    assert await store.exists("k")
    assert await store.ttl("k") == 0

    clock.advance(0.001)
    assert not await store.exists("k")
    assert await store.get_json("k") is None


async def test_ttl_none_for_persistent_or_missing(store):
    await store.set_json("k", "v")
    assert await store.ttl("k") is None
    assert await store.ttl("missing") is None


async def test_samples_are_filtered_by_score(store):
    assert await store.append_sample("s", "a", 10, ttl=100) == 1
    assert await store.append_sample("s", "c", 30, ttl=100) == 2
    assert await store.append_sample("s", "b", 20, ttl=100) == 3

    assert await store.samples_between("s", 0, float("inf")) == ["a", "b", "c"]
    assert await store.samples_between("s", 15, 30) == ["b", "c"]
    assert await store.samples_between("missing", 0, 100) == []


async def test_append_refreshes_ttl(store, clock):
    await store.append_sample("s", "a", 1, ttl=10)
    clock.advance(8)
    await store.append_sample("s", "b", 2, ttl=10)
    clock.advance(8)

    assert await store.samples_between("s", 0, 10) == ["a", "b"]


async def test_append_trims_samples_older_than_ttl(store):
    await store.append_sample("s", "a", 0, ttl=60)
    await store.append_sample("s", "b", 50, ttl=60)

    assert await store.append_sample("s", "c", 110, ttl=60) == 2
    assert await store.samples_between("s", 0, float("inf")) == ["b", "c"]


async def test_sets(store):
    await store.add_member("idx", "x", ttl=60)
    await store.add_member("idx", "y", ttl=60)
    await store.add_member("idx", "x", ttl=60)

    assert await store.members("idx") == {"x", "y"}
    assert await store.members("missing") == set()


async def test_type_mismatch_raises(store):
    await store.set_json("k", "v")
    with pytest.raises(StoreError):
        await store.members("k")


async def test_hit_counter_window(store, clock):
    assert await store.hit_counter("c", 60) == (1, 60)
    clock.advance(20)
    assert await store.hit_counter("c", 60) == (2, 40)

    clock.advance(40.5)
    count, seconds_left = await store.hit_counter("c", 60)
    assert count == 1
    assert seconds_left == 60


async def test_eviction_prefers_expired_then_earliest(clock):
    store = MemoryStore(clock=clock, max_entries=2)
    await store.set_json("short", 1, ttl=5)
    await store.set_json("long", 2, ttl=500)
    await store.set_json("new", 3, ttl=50)

    assert len(store) == 2
    assert not await store.exists("short")
    assert await store.exists("long")
    assert await store.exists("new")

    clock.advance(60)
    await store.set_json("newer", 4)
    assert await store.exists("long")
    assert await store.exists("newer")


async def test_delete_and_clear(store):
    await store.set_json("a", 1)
    await store.set_json("b", 2)
    await store.delete("a")
    assert not await store.exists("a")

    await store.clear()
    assert len(store) == 0
