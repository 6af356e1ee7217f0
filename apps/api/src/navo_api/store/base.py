"""Store interface.

Every multi-step write (append + expire, counter create + increment) is a
single operation here so callers never read-modify-write across requests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StoreError(Exception):
    """Base error raised by store backends."""


class StoreUnavailableError(StoreError):
    """The backend could not be reached or rejected the command."""


class Store(ABC):
    """Async key/value store with sorted-sample, set and counter primitives."""

    name: str = "store"

    @abstractmethod
    async def get_json(self, key: str) -> Any | None:
        """JSON-decoded value, or ``None`` when absent or expired."""

    @abstractmethod
    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a JSON-serialisable value, optionally expiring after ``ttl`` s."""

    @abstractmethod
    async def delete(self, key: str) -> None: ...

    @abstractmethod
    async def exists(self, key: str) -> bool: ...

    @abstractmethod
    async def ttl(self, key: str) -> float | None:
        """Seconds until expiry; ``None`` for missing or persistent keys."""

    @abstractmethod
    async def append_sample(
        self, key: str, member: str, score: float, ttl: int
    ) -> int:
        """Atomically add ``member`` at ``score`` and refresh the key TTL.

        Members scored more than ``ttl`` below ``score`` are dropped in the
        same write, so a bucket that keeps receiving samples stays bounded.
        Returns the number of members now held under ``key``.
        """

    @abstractmethod
    async def samples_between(
        self, key: str, min_score: float, max_score: float
    ) -> list[str]:
        """Members scored within ``[min_score, max_score]``, lowest first."""

    @abstractmethod
    async def add_member(self, key: str, member: str, ttl: int) -> None:
        """Atomically add ``member`` to a set and refresh its TTL."""

    @abstractmethod
    async def members(self, key: str) -> set[str]: ...

    @abstractmethod
    async def hit_counter(self, key: str, window_seconds: int) -> tuple[int, float]:
        """Increment a fixed-window counter.

        The first hit creates the counter with a ``window_seconds`` expiry;
        later hits only increment. Returns the new count and the seconds
        left before the window ends.
        """

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:  # noqa: B027
        """Release backend resources."""
