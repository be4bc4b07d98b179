"""Time helper tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from league_sync.utils.time import RESETTING_SOON, format_countdown, week_window


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (259200, "3d 0h"),
        (90061, "1d 1h"),
        (3600, "1h 0m"),
        (7199, "1h 59m"),
        (90, "1m"),
        (59, "0m"),
    ],
)
def test_format_countdown_truncates_units(seconds: int, expected: str) -> None:
    """Countdown should keep the two largest units and truncate the rest."""
    assert format_countdown(seconds) == expected


@pytest.mark.parametrize("seconds", [0, -1, -3600])
def test_format_countdown_non_positive(seconds: int) -> None:
    """Zero or negative remaining time should read as an imminent reset."""
    assert format_countdown(seconds) == RESETTING_SOON


def test_week_window_spans_seven_days() -> None:
    start = datetime(2026, 10, 12, tzinfo=UTC)
    week_start, week_end = week_window(start)
    assert week_start == start
    assert week_end - week_start == timedelta(days=7)
