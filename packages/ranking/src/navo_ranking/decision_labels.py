"""Decision badges and percentile price context for a result set.

Labels are exclusive. ``best_balance`` claims its flight first, then
``cheapest`` goes to the lowest price among the remaining flights and
``fastest`` to the shortest duration among what is left after that. Every
tie falls back to input order, so identical input always produces
identical output.

Price context is independent of labels: prices at or below the 35th
percentile are ``below_average``, at or above the 70th ``above_average``.
A price that sits on both thresholds (all prices equal) is ``average``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from navo_core.schemas import CamelModel, DecisionLabel, PriceContext

from .duration import parse_duration_to_minutes
from .scoring import calculate_score

if TYPE_CHECKING:
    from collections.abc import Sequence

    from navo_core.schemas import FlightResult

LOW_PERCENTILE = 35
HIGH_PERCENTILE = 70


class FlightDecision(CamelModel):
    label: DecisionLabel | None = None
    price_context: PriceContext


class DecisionStats(CamelModel):
    median_price: float
    p35: float
    p70: float
    best_balance_index: int
    cheapest_index: int | None = None
    fastest_index: int | None = None


class DecisionResult(CamelModel):
    """Per-flight decisions keyed by flight id, plus the numbers behind them."""

    decisions: dict[str, FlightDecision]
    stats: DecisionStats | None = None

    def label_for(self, flight_id: str) -> DecisionLabel | None:
        decision = self.decisions.get(flight_id)
        return decision.label if decision else None


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolation percentile over already sorted values."""
    if not sorted_values:
        msg = "percentile of an empty sequence"
        raise ValueError(msg)
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    rank = (p / 100) * (len(sorted_values) - 1)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return float(sorted_values[lower])
    weight = rank - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * weight


def compute_price_context(price: float, p35: float, p70: float) -> PriceContext:
    below = price <= p35
    above = price >= p70
    if below and above:
        return PriceContext.AVERAGE
    if below:
        return PriceContext.BELOW_AVERAGE
    if above:
        return PriceContext.ABOVE_AVERAGE
    return PriceContext.AVERAGE


def _argmin(candidates: Sequence[int], key) -> int | None:
    # min() keeps the first of equal keys
    return min(candidates, key=key, default=None)


def compute_decision_labels(flights: Sequence[FlightResult]) -> DecisionResult:
    """Assign labels and price context to every flight in ``flights``.

    Decisions are keyed by flight id, so ids must be unique; a repeated id
    raises ``ValueError``.
    """
    if not flights:
        return DecisionResult(decisions={})
    seen: set[str] = set()
    for flight in flights:
        if flight.id in seen:
            msg = f"duplicate flight id {flight.id!r}"
            raise ValueError(msg)
        seen.add(flight.id)

    indices = list(range(len(flights)))
    scores = [calculate_score(f) for f in flights]
    minutes = [parse_duration_to_minutes(f.duration) for f in flights]

    best = _argmin(indices, key=lambda i: (scores[i], flights[i].price))
    remaining = [i for i in indices if i != best]
    cheapest = _argmin(remaining, key=lambda i: flights[i].price)
    remaining = [i for i in remaining if i != cheapest]
    fastest = _argmin(remaining, key=lambda i: minutes[i])

    labels: dict[int, DecisionLabel] = {best: DecisionLabel.BEST_BALANCE}
    if cheapest is not None:
        labels[cheapest] = DecisionLabel.CHEAPEST
    if fastest is not None:
        labels[fastest] = DecisionLabel.FASTEST

    prices = sorted(f.price for f in flights)
    p35 = percentile(prices, LOW_PERCENTILE)
    p70 = percentile(prices, HIGH_PERCENTILE)

    decisions = {
        flight.id: FlightDecision(
            label=labels.get(i),
            price_context=compute_price_context(flight.price, p35, p70),
        )
        for i, flight in enumerate(flights)
    }
    stats = DecisionStats(
        median_price=percentile(prices, 50),
        p35=p35,
        p70=p70,
        best_balance_index=best,
        cheapest_index=cheapest,
        fastest_index=fastest,
    )
    return DecisionResult(decisions=decisions, stats=stats)
