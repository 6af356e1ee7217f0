"""Core schemas for Navo."""

from .base import CamelModel
from .enums import DecisionLabel, PriceContext, SearchSource, TravelClass
from .flight import FlightResult
from .price import PriceHistoryAggregate, PriceInsight, RouteRef
from .routes import (
    HolidayRef,
    OriginRef,
    PopularRouteCard,
    RouteCardsMeta,
    SmartRouteCard,
)

__all__ = [
    "CamelModel",
    "DecisionLabel",
    "FlightResult",
    "HolidayRef",
    "OriginRef",
    "PopularRouteCard",
    "PriceContext",
    "PriceHistoryAggregate",
    "PriceInsight",
    "RouteCardsMeta",
    "RouteRef",
    "SearchSource",
    "SmartRouteCard",
    "TravelClass",
]
