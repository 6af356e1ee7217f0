"""Search provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from navo_core.schemas import FlightResult, SearchSource

    from ..schemas.search import FlightSearchQuery


class SearchProviderError(Exception):
    """The provider could not answer (auth, timeout, upstream error)."""

    def __init__(
        self, code: str, message: str, *, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


@dataclass
class ProviderResult:
    """Flights from one provider call. An empty list is a valid answer."""

    flights: list[FlightResult]
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)


class SearchProvider(ABC):
    """One implementation is selected at startup and injected."""

    source: SearchSource

    @abstractmethod
    async def search(self, query: FlightSearchQuery) -> ProviderResult:
        """Run a search; raises :class:`SearchProviderError` on failure."""

    async def close(self) -> None:  # noqa: B027
        """Release provider resources."""
