"""Pydantic-compatible enums shared across packages."""

from enum import StrEnum


class DecisionLabel(StrEnum):
    """Badge assigned to at most one flight per result set."""

    BEST_BALANCE = "best_balance"
    CHEAPEST = "cheapest"
    FASTEST = "fastest"


class PriceContext(StrEnum):
    """Where a price sits within its own result set."""

    BELOW_AVERAGE = "below_average"
    AVERAGE = "average"
    ABOVE_AVERAGE = "above_average"


class SearchSource(StrEnum):
    """Origin of a search response."""

    MOCK = "mock"
    AMADEUS = "amadeus"


class TravelClass(StrEnum):
    """Cabin class accepted by the search providers."""

    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"
