"""Flight search providers."""

from .base import SearchProvider, SearchProviderError
from .mock import MockSearchProvider

__all__ = ["MockSearchProvider", "SearchProvider", "SearchProviderError"]
