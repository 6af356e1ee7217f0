"""Weighted price/duration score used to pick the best-balance flight."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .duration import parse_duration_to_minutes

if TYPE_CHECKING:
    from navo_core.schemas import FlightResult

# Protocol constants: one extra hour (2400 points) trades against 4000 BRL.
PRICE_WEIGHT = 0.6
DURATION_WEIGHT = 40


def calculate_score(flight: FlightResult) -> float:
    """Lower is better."""
    minutes = parse_duration_to_minutes(flight.duration)
    return flight.price * PRICE_WEIGHT + minutes * DURATION_WEIGHT
