"""Background job modules for leaderboard polling."""

from league_sync.jobs.poll_leaderboard import poll_leaderboard
from league_sync.jobs.scheduler import (
    build_scheduler,
    cancel_leaderboard_poll,
    schedule_leaderboard_poll,
)

__all__ = [
    "build_scheduler",
    "cancel_leaderboard_poll",
    "poll_leaderboard",
    "schedule_leaderboard_poll",
]
