"""Amadeus Self-Service flight offers provider."""

from .auth import AmadeusTokenProvider
from .client import AmadeusSearchProvider
from .mapper import map_flight_offers

__all__ = ["AmadeusSearchProvider", "AmadeusTokenProvider", "map_flight_offers"]
