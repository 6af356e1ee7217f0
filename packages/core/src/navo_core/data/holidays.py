"""Brazilian holiday calendar and suggested travel windows.

Windows follow the usual "ponte" (bridge) habits: a Thursday holiday
means leaving Wednesday and returning Monday, a Tuesday holiday means
leaving the Friday before, a Monday holiday means a Friday-Tuesday trip.
Everything else snaps back to the previous Friday and adds the suggested
length.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

MIN_BOOKING_DAYS = 3


@dataclass(frozen=True)
class Holiday:
    key: str
    name: str
    date: date
    has_bridge: bool
    suggested_days: int
    tags: frozenset[str]


@dataclass(frozen=True)
class HolidayWindow:
    key: str
    name: str
    start_date: date
    end_date: date
    days: int
    tags: frozenset[str]


def _h(
    key: str, name: str, day: str, bridge: bool, days: int, *tags: str
) -> Holiday:
    return Holiday(key, name, date.fromisoformat(day), bridge, days, frozenset(tags))


HOLIDAYS: list[Holiday] = [
    _h("natal-2025", "Natal", "2025-12-25", True, 7,
       "praia", "frio", "cidade", "medio", "internacional"),
    _h("reveillon-2026", "Réveillon", "2026-01-01", True, 7,
       "praia", "cidade", "medio", "internacional"),
    _h("verao-2026", "Férias de Verão", "2026-01-15", False, 7,
       "praia", "cidade", "medio", "internacional"),
    _h("carnaval-2026", "Carnaval", "2026-02-17", True, 5, "praia", "cidade", "curto"),
    _h("pascoa-2026", "Páscoa", "2026-04-05", True, 4, "praia", "curto"),
    _h("tiradentes-2026", "Tiradentes", "2026-04-21", True, 4,
       "frio", "cidade", "curto"),
    _h("trabalho-2026", "Dia do Trabalho", "2026-05-01", True, 4,
       "praia", "cidade", "curto"),
    _h("corpus-christi-2026", "Corpus Christi", "2026-06-04", True, 4,
       "frio", "cidade", "curto"),
    _h("independencia-2026", "Independência", "2026-09-07", True, 4, "praia", "curto"),
    _h("nossa-senhora-2026", "Nossa Senhora Aparecida", "2026-10-12", True, 4,
       "praia", "cidade", "curto"),
    _h("finados-2026", "Finados", "2026-11-02", True, 4, "cidade", "curto"),
    _h("proclamacao-2026", "Proclamação da República", "2026-11-15", False, 3,
       "praia", "curto"),
    _h("consciencia-negra-2026", "Consciência Negra", "2026-11-20", False, 3,
       "praia", "cidade", "curto"),
    _h("natal-2026", "Natal", "2026-12-25", False, 7,
       "praia", "frio", "cidade", "medio", "internacional"),
    _h("reveillon-2027", "Réveillon", "2027-01-01", False, 7,
       "praia", "cidade", "medio", "internacional"),
    _h("verao-2027", "Férias de Verão", "2027-01-15", False, 7,
       "praia", "cidade", "medio", "internacional"),
    _h("carnaval-2027", "Carnaval", "2027-02-09", True, 5, "praia", "cidade", "curto"),
    _h("pascoa-2027", "Páscoa", "2027-03-28", True, 4, "praia", "curto"),
    _h("trabalho-2027", "Dia do Trabalho", "2027-05-01", False, 3,
       "praia", "cidade", "curto"),
    _h("corpus-christi-2027", "Corpus Christi", "2027-05-27", True, 4,
       "frio", "cidade", "curto"),
]


def _js_weekday(day: date) -> int:
    """Weekday with Sunday = 0."""
    return (day.weekday() + 1) % 7


def calculate_window(holiday: Holiday) -> HolidayWindow:
    """Suggested departure/return dates around a holiday."""
    dow = _js_weekday(holiday.date)
    if holiday.has_bridge and dow == 4:
        start = holiday.date - timedelta(days=1)
        end = holiday.date + timedelta(days=4)
    elif holiday.has_bridge and dow == 2:
        start = holiday.date - timedelta(days=4)
        end = holiday.date + timedelta(days=1)
    elif holiday.has_bridge and dow == 1:
        start = holiday.date - timedelta(days=3)
        end = holiday.date + timedelta(days=1)
    else:
        # Back to the previous Friday (or the same day when it is one)
        start = holiday.date - timedelta(days=(dow + 2) % 7)
        end = start + timedelta(days=holiday.suggested_days)

    return HolidayWindow(
        key=holiday.key,
        name=holiday.name,
        start_date=start,
        end_date=end,
        days=(end - start).days,
        tags=holiday.tags,
    )


def get_next_holiday_windows(today: date, limit: int = 3) -> list[HolidayWindow]:
    """Windows for the next holidays at least ``MIN_BOOKING_DAYS`` away."""
    min_date = today + timedelta(days=MIN_BOOKING_DAYS)
    upcoming = sorted(
        (h for h in HOLIDAYS if h.date >= min_date), key=lambda h: h.date
    )
    return [calculate_window(h) for h in upcoming[:limit]]


def get_holiday_window(key: str) -> HolidayWindow | None:
    for holiday in HOLIDAYS:
        if holiday.key == key:
            return calculate_window(holiday)
    return None
