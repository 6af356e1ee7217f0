"""Duration parsing and formatting."""

from __future__ import annotations

import pytest

from navo_ranking.duration import format_duration, parse_duration_to_minutes


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("10h 45min", 645),
        ("90min", 90),
        ("3h", 180),
        ("45min 2h", 165),
        ("1 h 5 min", 65),
        ("duração: 2h e 30min aprox", 150),
        ("", 0),
        ("nonsense", 0),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration_to_minutes(text) == expected


@pytest.mark.parametrize("value", [None, 42, ["1h"]])
def test_parse_duration_never_raises_on_non_strings(value):
    assert parse_duration_to_minutes(value) == 0


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(645, "10h 45min"), (150, "2h 30min"), (45, "45min"), (120, "2h"), (0, "0min")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected
    if minutes:
        assert parse_duration_to_minutes(expected) == minutes
