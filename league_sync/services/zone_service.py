"""Promotion/demotion zone classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from league_sync.schemas.leaderboard import League, LeaderboardEntry, LeaderboardSnapshot
from league_sync.services.league_catalog import (
    get_league_config,
    get_next_league,
    get_previous_league,
)


class Zone(str, Enum):
    """Where a rank falls within its league."""

    PROMOTION = "promotion"
    DEMOTION = "demotion"
    SAFE = "safe"


@dataclass(frozen=True)
class RowZone:
    """Zone flags derived for a single leaderboard row."""

    entry: LeaderboardEntry
    promotion: bool
    demotion: bool

    @property
    def zone(self) -> Zone:
        if self.promotion:
            return Zone.PROMOTION
        if self.demotion:
            return Zone.DEMOTION
        return Zone.SAFE


def is_in_promotion_zone(rank: int, total: int, league: League) -> bool:
    """Return True when ``rank`` is within the top promotion percentile.

    The boundary is inclusive. A threshold of 0 (top league) never promotes.
    """
    if total == 0:
        return False
    threshold = get_league_config(league).promotion_threshold
    if threshold == 0:
        return False
    percentile = (rank / total) * 100
    return percentile <= threshold


def is_in_demotion_zone(rank: int, total: int, league: League) -> bool:
    """Return True when ``rank`` is within the bottom demotion percentile."""
    if total == 0:
        return False
    threshold = get_league_config(league).demotion_threshold
    if threshold == 0:
        return False
    bottom_percentile = ((total - rank + 1) / total) * 100
    return bottom_percentile <= threshold


def classify_zone(rank: int, total: int, league: League) -> Zone:
    """Collapse both checks into a single zone; promotion wins on overlap."""
    if is_in_promotion_zone(rank, total, league):
        return Zone.PROMOTION
    if is_in_demotion_zone(rank, total, league):
        return Zone.DEMOTION
    return Zone.SAFE


def projected_league(rank: int, total: int, league: League) -> League:
    """Return the league this rank would land in if the week ended now."""
    zone = classify_zone(rank, total, league)
    if zone is Zone.PROMOTION:
        return get_next_league(league) or league
    if zone is Zone.DEMOTION:
        return get_previous_league(league) or league
    return league


def has_minimum_participants(total: int, league: League) -> bool:
    """Return whether ``total`` reaches the league's participant floor.

    Advisory only: the classifiers above do not consult it.
    """
    return total >= get_league_config(league).min_participants


def row_zones(snapshot: LeaderboardSnapshot) -> list[RowZone]:
    """Derive zone flags for every row of ``snapshot``.

    Each row is classified from its own rank against ``total_in_league``; the
    snapshot's viewer-level ``promotion_zone``/``demotion_zone`` flags are not
    consulted and may disagree with the viewer's row.
    """
    return [
        RowZone(
            entry=entry,
            promotion=is_in_promotion_zone(entry.rank, snapshot.total_in_league, snapshot.league),
            demotion=is_in_demotion_zone(entry.rank, snapshot.total_in_league, snapshot.league),
        )
        for entry in snapshot.entries
    ]
