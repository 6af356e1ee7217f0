"""Suggested destinations for holiday-driven route picks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .airports import same_metro_area

if TYPE_CHECKING:
    from .holidays import HolidayWindow


@dataclass(frozen=True)
class SuggestedDestination:
    code: str
    city: str
    country: str
    tags: frozenset[str]
    flight_hours: int
    priority: int


def _d(
    code: str, city: str, country: str, hours: int, priority: int, *tags: str
) -> SuggestedDestination:
    return SuggestedDestination(code, city, country, frozenset(tags), hours, priority)


SUGGESTED_DESTINATIONS: list[SuggestedDestination] = [
    # Europe
    _d("LIS", "lisboa", "portugal", 9, 1,
       "cidade", "europa", "medio", "longo", "internacional"),
    _d("MAD", "madrid", "espanha", 10, 2,
       "cidade", "europa", "medio", "longo", "internacional"),
    _d("CDG", "paris", "frança", 11, 3,
       "cidade", "frio", "europa", "longo", "internacional"),
    _d("FCO", "roma", "itália", 11, 4, "cidade", "europa", "longo", "internacional"),
    _d("LHR", "londres", "reino unido", 11, 5,
       "cidade", "frio", "europa", "longo", "internacional"),
    _d("AMS", "amsterdam", "holanda", 11, 6,
       "cidade", "frio", "europa", "longo", "internacional"),
    # Americas
    _d("MIA", "miami", "estados unidos", 8, 10,
       "praia", "cidade", "medio", "internacional"),
    _d("MCO", "orlando", "estados unidos", 9, 11,
       "cidade", "medio", "longo", "internacional"),
    _d("JFK", "nova york", "estados unidos", 10, 12,
       "cidade", "frio", "medio", "longo", "internacional"),
    _d("EZE", "buenos aires", "argentina", 3, 15,
       "cidade", "frio", "curto", "medio", "internacional"),
    _d("SCL", "santiago", "chile", 4, 16,
       "cidade", "frio", "natureza", "curto", "medio", "internacional"),
    _d("CUN", "cancún", "méxico", 8, 20, "praia", "medio", "internacional"),
    # Domestic, Northeast
    _d("REC", "recife", "brasil", 3, 30, "praia", "curto", "domestico"),
    _d("SSA", "salvador", "brasil", 2, 31, "praia", "cidade", "curto", "domestico"),
    _d("FOR", "fortaleza", "brasil", 3, 32, "praia", "curto", "domestico"),
    _d("NAT", "natal", "brasil", 3, 33, "praia", "curto", "domestico"),
    _d("MCZ", "maceió", "brasil", 3, 34, "praia", "curto", "domestico"),
    # Domestic, South
    _d("FLN", "florianópolis", "brasil", 1, 40,
       "praia", "natureza", "curto", "domestico"),
    _d("POA", "porto alegre", "brasil", 2, 41, "cidade", "frio", "curto", "domestico"),
    # Domestic, other
    _d("SDU", "rio de janeiro", "brasil", 1, 50,
       "praia", "cidade", "curto", "domestico"),
]


def score_destination(dest: SuggestedDestination, window: HolidayWindow) -> int:
    """Higher is a better fit for the holiday window."""
    score = 100 - dest.priority
    score += len(dest.tags & window.tags) * 10

    if window.days <= 4 and "curto" in dest.tags:
        score += 15
    elif 5 <= window.days <= 7 and "medio" in dest.tags:
        score += 15
    elif window.days > 7 and "longo" in dest.tags:
        score += 15

    if window.days <= 4 and dest.flight_hours > 6:
        score -= 20
    if window.days <= 4 and "domestico" in dest.tags:
        score += 10
    if window.days >= 7 and "internacional" in dest.tags:
        score += 10
    return score


def pick_destinations_for_holiday(
    window: HolidayWindow, origin: str, limit: int = 6
) -> list[SuggestedDestination]:
    """Best-scoring destinations reachable from ``origin`` (stable on ties)."""
    candidates = [
        d for d in SUGGESTED_DESTINATIONS if not same_metro_area(d.code, origin)
    ]
    ranked = sorted(candidates, key=lambda d: -score_destination(d, window))
    return ranked[:limit]


def get_destination(code: str) -> SuggestedDestination | None:
    return next((d for d in SUGGESTED_DESTINATIONS if d.code == code.upper()), None)
