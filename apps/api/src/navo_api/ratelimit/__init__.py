"""Fixed-window rate limiting with interchangeable backends."""

from .base import RateLimiter, RateLimitResult
from .identity import client_ip, hash_identifier, limiter_key
from .memory import MemoryRateLimiter
from .store import StoreRateLimiter

__all__ = [
    "MemoryRateLimiter",
    "RateLimitResult",
    "RateLimiter",
    "StoreRateLimiter",
    "client_ip",
    "hash_identifier",
    "limiter_key",
]
