"""Store key builders.

These formats are persisted and shared between instances; changing one
orphans existing data.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import date

PRICE_HISTORY_PREFIX = "price-history"
PRICE_HISTORY_INDEX_PREFIX = "price-history-index"
SESSION_PREFIX = "session"
FLIGHT_PREFIX = "flight"
RATE_LIMIT_PREFIX = "ratelimit"
SEARCH_PREFIX = "search"


def route_id(origin: str, destination: str) -> str:
    return f"{origin.upper()}-{destination.upper()}"


def month_of(day: date) -> str:
    return day.strftime("%Y-%m")


def price_history_key(origin: str, destination: str, month: str) -> str:
    """``price-history:{ORIGIN}-{DEST}-{YYYY-MM}``."""
    return f"{PRICE_HISTORY_PREFIX}:{route_id(origin, destination)}-{month}"


def price_history_index_key(origin: str, destination: str) -> str:
    """Set of month bucket keys recorded for a route."""
    return f"{PRICE_HISTORY_INDEX_PREFIX}:{route_id(origin, destination)}"


def session_key(sid: str) -> str:
    return f"{SESSION_PREFIX}:{sid}"


def flight_key(flight_id: str) -> str:
    return f"{FLIGHT_PREFIX}:{flight_id}"


def rate_limit_key(identifier: str) -> str:
    return f"{RATE_LIMIT_PREFIX}:{identifier}"


def search_key(params: Mapping[str, object]) -> str:
    """Build cache key for a normalized search query."""
    canonical = json.dumps(
        {k: v for k, v in sorted(params.items()) if v is not None},
        separators=(",", ":"),
        default=str,
    )
    digest = hashlib.sha1(canonical.encode()).hexdigest()
    return f"{SEARCH_PREFIX}:{digest}"
