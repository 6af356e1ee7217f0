"""Deterministic ranking for flight result lists."""

from .decision_labels import (
    DecisionResult,
    DecisionStats,
    FlightDecision,
    compute_decision_labels,
    compute_price_context,
    percentile,
)
from .duration import format_duration, parse_duration_to_minutes
from .scoring import DURATION_WEIGHT, PRICE_WEIGHT, calculate_score

__all__ = [
    "DURATION_WEIGHT",
    "DecisionResult",
    "DecisionStats",
    "FlightDecision",
    "PRICE_WEIGHT",
    "calculate_score",
    "compute_decision_labels",
    "compute_price_context",
    "format_duration",
    "parse_duration_to_minutes",
    "percentile",
]
