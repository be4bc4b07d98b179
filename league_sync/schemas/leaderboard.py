"""Leaderboard, league and weekly result schemas.

The remote service speaks camelCase JSON; every model here accepts both the
wire alias and the Python field name, and dumps camelCase with
``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class League(str, Enum):
    """League tiers, declared bottom to top."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    DIAMOND = "diamond"


class RankTrend(str, Enum):
    """Rank movement relative to the previous snapshot."""

    UP = "up"
    DOWN = "down"
    SAME = "same"


class CamelModel(BaseModel):
    """Base model for camelCase wire payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Immutable camelCase model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LeagueConfig(FrozenCamelModel):
    """Display metadata and zone thresholds for one league.

    A threshold of ``0`` means the direction does not exist for this league
    (no promotion out of the top league, no demotion out of the bottom one).
    """

    name: League
    display_name: str
    primary_color: str
    secondary_color: str
    icon: str
    promotion_threshold: float = Field(ge=0, le=100)
    demotion_threshold: float = Field(ge=0, le=100)
    min_participants: int = Field(ge=0)


class LeaderboardEntry(FrozenCamelModel):
    """One ranked participant on a leaderboard page."""

    rank: int = Field(ge=1)
    user_id: str
    username: str
    avatar_url: str | None = None
    weekly_xp: int = Field(ge=0, alias="weeklyXP")
    league: League
    trend: RankTrend = RankTrend.SAME
    trend_amount: int | None = None
    is_current_user: bool = False


class LeaderboardSnapshot(FrozenCamelModel):
    """A fetched leaderboard page for one league and week.

    ``promotion_zone`` / ``demotion_zone`` describe the viewer only. Per-row
    membership comes from ``zone_service.row_zones``.
    """

    league: League
    entries: tuple[LeaderboardEntry, ...] = ()
    user_rank: int = Field(ge=0)
    total_in_league: int = Field(ge=0)
    promotion_zone: bool = False
    demotion_zone: bool = False
    # Zero or negative once the week has ended and the reset is pending.
    time_until_reset: float
    week_start_date: datetime
    week_end_date: datetime

    @model_validator(mode="after")
    def _check_consistency(self) -> LeaderboardSnapshot:
        ranks = [entry.rank for entry in self.entries]
        if any(later <= earlier for earlier, later in zip(ranks, ranks[1:])):
            raise ValueError("entries must be unique and rank-ascending")
        if sum(1 for entry in self.entries if entry.is_current_user) > 1:
            raise ValueError("at most one entry may be the current user")
        if self.total_in_league < len(self.entries):
            raise ValueError("totalInLeague is smaller than the number of entries")
        if self.week_end_date <= self.week_start_date:
            raise ValueError("weekEndDate must be after weekStartDate")
        return self

    def current_user_index(self) -> int | None:
        """Return the index of the viewer's row, if it is on this page."""
        for index, entry in enumerate(self.entries):
            if entry.is_current_user:
                return index
        return None


class WeeklyResult(FrozenCamelModel):
    """Final standing of one user for one completed week."""

    week_id: str
    league: League
    final_rank: int = Field(ge=1)
    total_participants: int = Field(ge=0)
    weekly_xp: int = Field(ge=0, alias="weeklyXP")
    promoted: bool = False
    demoted: bool = False
    new_league: League | None = None


class UserLeaderboardStatus(FrozenCamelModel):
    """Per-user standing, independent of any leaderboard page.

    Local changes go through ``model_copy(update=...)`` so the engine always
    swaps in a whole new object.
    """

    user_id: str
    league: League
    is_opted_in: bool = True
    weekly_xp: int = Field(ge=0, alias="weeklyXP")
    current_rank: int = Field(ge=0)
    previous_rank: int | None = None
    promotion_streak: int = Field(default=0, ge=0)
    last_week_result: WeeklyResult | None = None


class Envelope(CamelModel, Generic[T]):
    """Standard ``{success, data, message}`` response body."""

    success: bool
    data: T | None = None
    message: str | None = None


class OptOutResult(CamelModel):
    """Body of a successful opt-out toggle."""

    is_opted_in: bool
    message: str = ""


class HistoryPage(CamelModel):
    """One page of weekly results."""

    history: list[WeeklyResult] = Field(default_factory=list)
    total: int = 0


class OptOutRequest(CamelModel):
    """Request body for toggling leaderboard participation."""

    user_id: str
    opt_in: bool


LeaderboardResponse = Envelope[LeaderboardSnapshot]
UserStatusResponse = Envelope[UserLeaderboardStatus]
OptOutResponse = Envelope[OptOutResult]
HistoryResponse = Envelope[HistoryPage]
