"""Deterministic offline provider for development and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from navo_core.schemas import FlightResult, SearchSource

from .base import ProviderResult, SearchProvider

if TYPE_CHECKING:
    from ..schemas.search import FlightSearchQuery

_BASE_OFFERS: list[dict] = [
    {
        "airline": "latam",
        "airline_code": "LA",
        "departure": "22:30",
        "arrival": "11:15",
        "duration": "10h 45min",
        "stops": "direto",
        "price": 3420,
        "offers_count": 4,
        "next_day_arrival": True,
    },
    {
        "airline": "tap",
        "airline_code": "TP",
        "departure": "23:55",
        "arrival": "12:30",
        "duration": "10h 35min",
        "stops": "direto",
        "price": 3180,
        "offers_count": 3,
        "next_day_arrival": True,
    },
    {
        "airline": "azul",
        "airline_code": "AD",
        "departure": "20:10",
        "arrival": "14:50",
        "duration": "13h 40min",
        "stops": "1 escala",
        "stops_cities": ["Lisboa"],
        "price": 2890,
        "offers_count": 5,
        "co2": "-12% CO₂",
        "next_day_arrival": True,
    },
    {
        "airline": "iberia",
        "airline_code": "IB",
        "departure": "21:45",
        "arrival": "15:10",
        "duration": "13h 25min",
        "stops": "1 escala",
        "stops_cities": ["Madrid"],
        "price": 3010,
        "offers_count": 2,
        "next_day_arrival": True,
    },
    {
        "airline": "air france",
        "airline_code": "AF",
        "departure": "19:30",
        "arrival": "13:05",
        "duration": "13h 35min",
        "stops": "1 escala",
        "stops_cities": ["Paris"],
        "price": 3320,
        "offers_count": 3,
        "next_day_arrival": True,
    },
    {
        "airline": "gol",
        "airline_code": "G3",
        "departure": "06:15",
        "arrival": "20:40",
        "duration": "12h 25min",
        "stops": "1 escala",
        "stops_cities": ["Miami"],
        "price": 2650,
        "offers_count": 6,
    },
    {
        "airline": "lufthansa",
        "airline_code": "LH",
        "departure": "18:00",
        "arrival": "10:45",
        "duration": "14h 45min",
        "stops": "2 escalas",
        "stops_cities": ["Frankfurt", "Munique"],
        "price": 2780,
        "offers_count": 2,
        "co2": "+8% CO₂",
        "next_day_arrival": True,
    },
]


def route_multiplier(origin: str, destination: str) -> float:
    return 0.9 if (len(origin) + len(destination)) % 3 == 0 else 1.1


def generate_results(
    origin: str, destination: str, depart: str
) -> list[FlightResult]:
    """Seven offers, identical for the same route and date."""
    multiplier = route_multiplier(origin, destination)
    return [
        FlightResult(
            **{
                **offer,
                "id": f"mock-{origin}-{destination}-{depart}-{n}",
                # half-up, whole BRL
                "price": int(offer["price"] * multiplier + 0.5),
            }
        )
        for n, offer in enumerate(_BASE_OFFERS, 1)
    ]


class MockSearchProvider(SearchProvider):
    source = SearchSource.MOCK

    async def search(self, query: FlightSearchQuery) -> ProviderResult:
        flights = generate_results(
            query.origin, query.destination, query.depart.isoformat()
        )
        if query.non_stop:
            flights = [f for f in flights if f.stops == "direto"]
        flights = flights[: query.max_results]
        return ProviderResult(flights=flights)
