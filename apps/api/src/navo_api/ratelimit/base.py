"""Rate limiter interface.

Windows are anchored at the first request for a key and end once the
clock moves strictly past ``window_start + window_seconds``. Both backends
follow the same arithmetic so swapping them never changes a decision.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import RateLimitPolicy


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_seconds),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_seconds)
        return headers


def reset_after(seconds_left: float) -> int:
    """Whole seconds until the window resets, never below one."""
    return max(1, math.ceil(seconds_left))


class RateLimiter(ABC):
    name: str = "limiter"

    @abstractmethod
    async def check(self, key: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Count one request for ``key`` and decide whether it may proceed."""
