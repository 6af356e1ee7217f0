"""Curated popular routes shown on the home page."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PopularRoute:
    origin: str
    destination: str
    label_city: str
    country: str
    origin_city: str
    enabled: bool = True
    priority: int = 99


# Lower priority value = shown first
POPULAR_ROUTES: list[PopularRoute] = [
    # International from São Paulo
    PopularRoute("GRU", "LIS", "lisboa", "portugal", "são paulo", priority=1),
    PopularRoute("GRU", "MAD", "madrid", "espanha", "são paulo", priority=2),
    PopularRoute("GRU", "CDG", "paris", "frança", "são paulo", priority=3),
    PopularRoute("GRU", "LHR", "londres", "reino unido", "são paulo", priority=4),
    PopularRoute("GRU", "MIA", "miami", "estados unidos", "são paulo", priority=5),
    PopularRoute("GRU", "JFK", "nova york", "estados unidos", "são paulo", priority=6),
    # Domestic
    PopularRoute("GIG", "REC", "recife", "brasil", "rio de janeiro", priority=10),
    PopularRoute("GRU", "SSA", "salvador", "brasil", "são paulo", priority=11),
    PopularRoute("GRU", "FOR", "fortaleza", "brasil", "são paulo", priority=12),
    # Other origins
    PopularRoute("GIG", "LIS", "lisboa", "portugal", "rio de janeiro", priority=20),
    PopularRoute("BSB", "MIA", "miami", "estados unidos", "brasília", priority=21),
]


def get_enabled_popular_routes() -> list[PopularRoute]:
    """Enabled routes ordered by priority (stable for equal priorities)."""
    return sorted(
        (route for route in POPULAR_ROUTES if route.enabled),
        key=lambda route: route.priority,
    )
