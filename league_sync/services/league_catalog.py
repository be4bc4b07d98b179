"""Static league ladder configuration."""

from __future__ import annotations

from types import MappingProxyType

from league_sync.schemas.leaderboard import League, LeagueConfig

LEAGUE_ORDER: tuple[League, ...] = (
    League.BRONZE,
    League.SILVER,
    League.GOLD,
    League.DIAMOND,
)

_LEAGUE_INDEX = {league: index for index, league in enumerate(LEAGUE_ORDER)}

LEAGUE_CONFIG = MappingProxyType(
    {
        League.BRONZE: LeagueConfig(
            name=League.BRONZE,
            display_name="Bronze",
            primary_color="#CD7F32",
            secondary_color="#8B4513",
            icon="shield",
            promotion_threshold=50,
            demotion_threshold=0,
            min_participants=10,
        ),
        League.SILVER: LeagueConfig(
            name=League.SILVER,
            display_name="Silver",
            primary_color="#C0C0C0",
            secondary_color="#A9A9A9",
            icon="shield",
            promotion_threshold=25,
            demotion_threshold=25,
            min_participants=10,
        ),
        League.GOLD: LeagueConfig(
            name=League.GOLD,
            display_name="Gold",
            primary_color="#FFD700",
            secondary_color="#DAA520",
            icon="crown",
            promotion_threshold=10,
            demotion_threshold=25,
            min_participants=10,
        ),
        League.DIAMOND: LeagueConfig(
            name=League.DIAMOND,
            display_name="Diamond",
            primary_color="#B9F2FF",
            secondary_color="#00CED1",
            icon="gem",
            promotion_threshold=0,
            demotion_threshold=50,
            min_participants=10,
        ),
    }
)


def get_league_config(league: League) -> LeagueConfig:
    """Return the configuration for ``league``."""
    return LEAGUE_CONFIG[League(league)]


def get_next_league(league: League) -> League | None:
    """Return the league one tier up, or None from the top league."""
    index = _LEAGUE_INDEX[League(league)]
    if index < len(LEAGUE_ORDER) - 1:
        return LEAGUE_ORDER[index + 1]
    return None


def get_previous_league(league: League) -> League | None:
    """Return the league one tier down, or None from the bottom league."""
    index = _LEAGUE_INDEX[League(league)]
    if index > 0:
        return LEAGUE_ORDER[index - 1]
    return None


def compare_leagues(left: League, right: League) -> int:
    """Return -1, 0 or 1 as ``left`` sits below, level with or above ``right``."""
    diff = _LEAGUE_INDEX[League(left)] - _LEAGUE_INDEX[League(right)]
    return (diff > 0) - (diff < 0)
