"""Request id format and route prefixes."""

from __future__ import annotations

import re

import pytest

from navo_api.middleware.rate_limit import policy_for
from navo_api.middleware.request_id import generate_request_id, prefix_for_path


def test_format():
    request_id = generate_request_id("search", now_ms=1_767_225_600_000)

    prefix, stamp, suffix = request_id.split("_")
    assert prefix == "search"
    assert int(stamp, 36) == 1_767_225_600_000
    assert re.fullmatch(r"[0-9a-z]{6}", suffix)


def test_ids_are_unique():
    assert len({generate_request_id() for _ in range(200)}) == 200


@pytest.mark.parametrize(
    ("path", "prefix"),
    [
        ("/api/routes/popular", "pop"),
        ("/api/routes/smart-popular", "smart"),
        ("/api/flights/search", "search"),
        ("/api/flights/mock-1", "flight"),
        ("/api/track/partner-click", "track"),
        ("/health", "req"),
    ],
)
def test_prefix_for_path(path, prefix):
    assert prefix_for_path(path) == prefix


@pytest.mark.parametrize(
    ("method", "path", "policy"),
    [
        ("GET", "/api/flights/search", "search"),
        ("GET", "/api/flights/mock-1", "detail"),
        ("GET", "/api/routes/popular", "public"),
        ("POST", "/api/track/partner-click", "public"),
        ("GET", "/health", None),
        ("POST", "/api/flights/search", None),
    ],
)
def test_policy_for(method, path, policy):
    assert policy_for(method, path) == policy


async def test_header_matches_body(client):
    resp = await client.get("/api/routes/popular")
    assert resp.headers["X-Request-Id"] == resp.json()["requestId"]
