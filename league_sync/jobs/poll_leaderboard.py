"""Background leaderboard polling job."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from league_sync.services.sync_engine import LeaderboardSyncEngine

logger = logging.getLogger(__name__)


async def poll_leaderboard(engine: LeaderboardSyncEngine) -> None:
    """Re-fetch the engine's leaderboard; user status is not re-polled."""
    logger.debug("Polling leaderboard for user %s", engine.user_id)
    await engine.fetch_leaderboard()
