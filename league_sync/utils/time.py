"""Time utility helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

RESETTING_SOON = "Resetting soon..."
WEEK = timedelta(days=7)


def now_utc() -> datetime:
    """Return current timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def week_window(start: datetime | None = None) -> tuple[datetime, datetime]:
    """Return a nominal seven-day window beginning at ``start`` (or now)."""
    week_start = start or now_utc()
    return week_start, week_start + WEEK


def format_countdown(seconds: float) -> str:
    """Format seconds until the weekly reset in compact form.

    Units are truncated, never rounded: ``90`` is ``"1m"`` and ``259200`` is
    ``"3d 0h"``.
    """
    if seconds <= 0:
        return RESETTING_SOON

    total = int(seconds)
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
