"""Service package exports with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "EventBus": "league_sync.services.event_bus",
    "LeaderboardClient": "league_sync.services.api_client",
    "LeaderboardSyncEngine": "league_sync.services.sync_engine",
    "SyncState": "league_sync.services.sync_engine",
    "Zone": "league_sync.services.zone_service",
    "default_event_bus": "league_sync.services.event_bus",
    "get_league_config": "league_sync.services.league_catalog",
    "get_next_league": "league_sync.services.league_catalog",
    "get_previous_league": "league_sync.services.league_catalog",
    "is_in_demotion_zone": "league_sync.services.zone_service",
    "is_in_promotion_zone": "league_sync.services.zone_service",
    "row_zones": "league_sync.services.zone_service",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
