"""Map Amadeus flight-offers payloads to :class:`FlightResult`."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

from navo_core.schemas import FlightResult
from navo_ranking import format_duration

logger = logging.getLogger(__name__)

AIRLINE_NAMES: dict[str, str] = {
    "LA": "latam",
    "JJ": "latam",
    "TP": "tap",
    "AD": "azul",
    "IB": "iberia",
    "AF": "air france",
    "G3": "gol",
    "LH": "lufthansa",
    "UA": "united",
    "AA": "american",
    "DL": "delta",
    "BA": "british airways",
    "KL": "klm",
    "LX": "swiss",
    "AZ": "ita airways",
    "EK": "emirates",
    "QR": "qatar",
    "TK": "turkish",
    "AC": "air canada",
    "AV": "avianca",
    "CM": "copa",
    "ET": "ethiopian",
    "LO": "lot polish",
    "AR": "aerolineas argentinas",
    "AM": "aeromexico",
}

_ISO_DURATION_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?)?$")
_TIME_RE = re.compile(r"T(\d{2}):(\d{2})")


def parse_iso_duration_to_minutes(value: str | None) -> int:
    """``PT10H45M`` → 645. Unparseable input yields 0."""
    match = _ISO_DURATION_RE.match(value or "")
    if not match:
        return 0
    days, hours, minutes = (int(g) if g else 0 for g in match.groups())
    return days * 1440 + hours * 60 + minutes


def _clock_time(iso_datetime: str) -> str:
    try:
        return datetime.fromisoformat(iso_datetime).strftime("%H:%M")
    except ValueError:
        match = _TIME_RE.search(iso_datetime)
        return f"{match.group(1)}:{match.group(2)}" if match else ""


def _next_day(departure_at: str, arrival_at: str) -> bool:
    return departure_at[:10] != arrival_at[:10]


def _airline_name(code: str, dictionaries: dict[str, Any]) -> str:
    if code in AIRLINE_NAMES:
        return AIRLINE_NAMES[code]
    carrier = dictionaries.get("carriers", {}).get(code)
    return carrier.lower() if carrier else code.lower()


def _stops(
    segments: list[dict[str, Any]], dictionaries: dict[str, Any]
) -> tuple[str, list[str]]:
    count = len(segments) - 1
    if count == 0:
        return "direto", []
    locations = dictionaries.get("locations", {})
    cities = []
    for segment in segments[:-1]:
        code = segment["arrival"]["iataCode"]
        cities.append(locations.get(code, {}).get("cityCode") or code)
    return ("1 escala" if count == 1 else f"{count} escalas"), cities


def _is_valid(offer: dict[str, Any]) -> bool:
    try:
        segments = offer["itineraries"][0]["segments"]
        return bool(
            offer["id"]
            and offer["price"]["grandTotal"]
            and segments
            and segments[0]["departure"]["at"]
            and segments[-1]["arrival"]["at"]
            and segments[0]["carrierCode"]
            and all(s["arrival"]["iataCode"] for s in segments[:-1])
        )
    except (KeyError, IndexError, TypeError):
        return False


def map_offer(
    offer: dict[str, Any], dictionaries: dict[str, Any]
) -> FlightResult | None:
    """One offer, or ``None`` when required fields are missing or malformed."""
    if not isinstance(offer, dict):
        return None
    if not _is_valid(offer):
        logger.debug("Skipping invalid Amadeus offer %s", offer.get("id"))
        return None
    try:
        return _to_flight(offer, dictionaries)
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.debug("Skipping malformed Amadeus offer %s: %s", offer["id"], exc)
        return None


def _to_flight(offer: dict[str, Any], dictionaries: dict[str, Any]) -> FlightResult:
    price = float(offer["price"]["grandTotal"])
    itinerary = offer["itineraries"][0]
    segments = itinerary["segments"]
    first, last = segments[0], segments[-1]
    carrier = (offer.get("validatingAirlineCodes") or [first["carrierCode"]])[0]
    stops, cities = _stops(segments, dictionaries)

    return FlightResult(
        id=f"amadeus-{offer['id']}",
        airline=_airline_name(carrier, dictionaries),
        airline_code=carrier,
        departure=_clock_time(first["departure"]["at"]),
        arrival=_clock_time(last["arrival"]["at"]),
        duration=format_duration(
            parse_iso_duration_to_minutes(itinerary.get("duration"))
        ),
        stops=stops,
        stops_cities=cities or None,
        price=int(price + 0.5),
        offers_count=offer.get("numberOfBookableSeats") or 1,
        next_day_arrival=_next_day(first["departure"]["at"], last["arrival"]["at"]),
    )


def map_flight_offers(payload: dict[str, Any]) -> tuple[list[FlightResult], int]:
    """All valid offers sorted by price, plus the number skipped.

    A repeated offer id is skipped after its first occurrence.
    """
    dictionaries = payload.get("dictionaries") or {}
    flights: list[FlightResult] = []
    seen: set[str] = set()
    skipped = 0
    for offer in payload.get("data") or []:
        mapped = map_offer(offer, dictionaries)
        if mapped is None or mapped.id in seen:
            skipped += 1
        else:
            seen.add(mapped.id)
            flights.append(mapped)
    flights.sort(key=lambda f: f.price)
    return flights, skipped
