"""Airport → city lookup used for display labels."""

from __future__ import annotations

AIRPORT_CITIES: dict[str, str] = {
    # São Paulo
    "GRU": "são paulo",
    "CGH": "são paulo",
    "VCP": "campinas",
    # Rio de Janeiro
    "GIG": "rio de janeiro",
    "SDU": "rio de janeiro",
    # Other Brazil
    "BSB": "brasília",
    "CNF": "belo horizonte",
    "POA": "porto alegre",
    "CWB": "curitiba",
    "REC": "recife",
    "SSA": "salvador",
    "FOR": "fortaleza",
    "NAT": "natal",
    "MCZ": "maceió",
    "FLN": "florianópolis",
    # International
    "LIS": "lisboa",
    "MAD": "madrid",
    "CDG": "paris",
    "FCO": "roma",
    "LHR": "londres",
    "AMS": "amsterdam",
    "MIA": "miami",
    "MCO": "orlando",
    "JFK": "nova york",
    "EZE": "buenos aires",
    "SCL": "santiago",
    "CUN": "cancún",
}

# Airports serving the same metropolitan area
METRO_AREAS: list[frozenset[str]] = [
    frozenset({"GRU", "CGH", "VCP"}),
    frozenset({"GIG", "SDU"}),
]


def city_for_airport(code: str) -> str:
    """Lowercase city name, falling back to the lowercased code."""
    return AIRPORT_CITIES.get(code.upper(), code.lower())


def same_metro_area(a: str, b: str) -> bool:
    a, b = a.upper(), b.upper()
    if a == b:
        return True
    return any(a in area and b in area for area in METRO_AREAS)
