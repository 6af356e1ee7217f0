"""Conversion between display durations ("10h 45min") and minutes."""

from __future__ import annotations

import re

_HOURS_RE = re.compile(r"(\d+)\s*h", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*min", re.IGNORECASE)


def parse_duration_to_minutes(duration: object) -> int:
    """Total minutes in a display duration.

    Hour and minute tokens may appear in either order with any text in
    between; a missing token counts as zero. Anything unparseable yields 0.
    """
    if not isinstance(duration, str) or not duration:
        return 0
    hours = _HOURS_RE.search(duration)
    minutes = _MINUTES_RE.search(duration)
    total = 0
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def format_duration(total_minutes: int) -> str:
    """Inverse of :func:`parse_duration_to_minutes` for non-negative input."""
    if total_minutes <= 0:
        return "0min"
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{minutes}min"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}min"
