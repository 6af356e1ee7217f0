"""Key/value store backends shared by sessions, price history and limits."""

from .base import Store, StoreError, StoreUnavailableError
from .memory import MemoryStore
from .redis_store import RedisStore

__all__ = [
    "MemoryStore",
    "RedisStore",
    "Store",
    "StoreError",
    "StoreUnavailableError",
]
