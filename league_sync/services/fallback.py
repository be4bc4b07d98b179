"""Synthetic demo data shown while the leaderboard service is unreachable."""

from __future__ import annotations

from league_sync.schemas.leaderboard import (
    League,
    LeaderboardEntry,
    LeaderboardSnapshot,
    RankTrend,
    UserLeaderboardStatus,
)
from league_sync.utils.time import now_utc, week_window

FALLBACK_NAMES = (
    "Alex K.",
    "Maria S.",
    "James L.",
    "Sarah M.",
    "You",
    "David R.",
    "Emma T.",
    "Michael B.",
    "Lisa W.",
    "Chris P.",
)
CURRENT_USER_INDEX = 4
FALLBACK_TOTAL_IN_LEAGUE = 25
FALLBACK_TIME_UNTIL_RESET = 3 * 24 * 60 * 60

_TRENDS = (RankTrend.UP, RankTrend.DOWN, RankTrend.SAME)


def fallback_entries(current_user_id: str) -> tuple[LeaderboardEntry, ...]:
    """Return ten deterministic bronze entries with the viewer at rank 5."""
    entries = []
    for index, name in enumerate(FALLBACK_NAMES):
        trend = _TRENDS[index % 3]
        is_current = index == CURRENT_USER_INDEX
        entries.append(
            LeaderboardEntry(
                rank=index + 1,
                user_id=current_user_id if is_current else f"user-{index}",
                username=name,
                weekly_xp=1000 - index * 50,
                league=League.BRONZE,
                trend=trend,
                trend_amount=0 if trend is RankTrend.SAME else index % 3 + 1,
                is_current_user=is_current,
            )
        )
    return tuple(entries)


def fallback_snapshot(current_user_id: str) -> LeaderboardSnapshot:
    """Return the placeholder snapshot used after a failed fetch."""
    week_start, week_end = week_window(now_utc())
    return LeaderboardSnapshot(
        league=League.BRONZE,
        entries=fallback_entries(current_user_id),
        user_rank=CURRENT_USER_INDEX + 1,
        total_in_league=FALLBACK_TOTAL_IN_LEAGUE,
        promotion_zone=True,
        demotion_zone=False,
        time_until_reset=FALLBACK_TIME_UNTIL_RESET,
        week_start_date=week_start,
        week_end_date=week_end,
    )


def fallback_status(user_id: str) -> UserLeaderboardStatus:
    """Return the placeholder status used after a failed status fetch."""
    return UserLeaderboardStatus(
        user_id=user_id,
        league=League.BRONZE,
        is_opted_in=True,
        weekly_xp=450,
        current_rank=CURRENT_USER_INDEX + 1,
        promotion_streak=0,
    )
