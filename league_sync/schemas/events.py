"""Event bus topics and payload schemas."""

from __future__ import annotations

from datetime import datetime

from league_sync.schemas.leaderboard import CamelModel, League

XP_EARNED = "xp:earned"
OPT_OUT_CHANGED = "leaderboard:opt-out-changed"
RANK_CHANGED = "leaderboard:rank-changed"
PROMOTION = "leaderboard:promotion"
DEMOTION = "leaderboard:demotion"
WEEKLY_RESET = "leaderboard:weekly-reset"


class XPEarned(CamelModel):
    """XP granted elsewhere in the app (lesson completed, quiz passed...)."""

    amount: float
    source: str | None = None


class OptOutChanged(CamelModel):
    """Published by the engine after a confirmed opt-in/opt-out toggle."""

    user_id: str
    is_opted_in: bool


class RankChanged(CamelModel):
    """Reserved for the service; not produced by the engine."""

    user_id: str
    old_rank: int
    new_rank: int
    league: League


class LeagueMove(CamelModel):
    """Payload for promotion and demotion topics."""

    user_id: str
    from_league: League
    to_league: League


class WeeklyReset(CamelModel):
    """Reserved for the service; emitted when a week closes."""

    week_id: str
    timestamp: datetime


EVENT_PAYLOADS: dict[str, type[CamelModel]] = {
    XP_EARNED: XPEarned,
    OPT_OUT_CHANGED: OptOutChanged,
    RANK_CHANGED: RankChanged,
    PROMOTION: LeagueMove,
    DEMOTION: LeagueMove,
    WEEKLY_RESET: WeeklyReset,
}
