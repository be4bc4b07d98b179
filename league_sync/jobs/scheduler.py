"""APScheduler setup and poll job registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from league_sync.config import settings
from league_sync.jobs.poll_leaderboard import poll_leaderboard

if TYPE_CHECKING:
    from league_sync.services.sync_engine import LeaderboardSyncEngine


def build_scheduler() -> AsyncIOScheduler:
    """Return a new, not yet started, asyncio scheduler."""
    return AsyncIOScheduler(timezone=settings.timezone)


def poll_job_id(engine: LeaderboardSyncEngine) -> str:
    """Return the job id owned by ``engine``."""
    return f"leaderboard_poll:{engine.user_id}:{engine.instance_id}"


def schedule_leaderboard_poll(
    scheduler: AsyncIOScheduler,
    engine: LeaderboardSyncEngine,
    interval_ms: int,
) -> str:
    """Install (or replace) the repeating poll job for ``engine``."""
    job_id = poll_job_id(engine)
    scheduler.add_job(
        poll_leaderboard,
        IntervalTrigger(seconds=interval_ms / 1000, timezone=settings.timezone),
        args=[engine],
        id=job_id,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return job_id


def cancel_leaderboard_poll(scheduler: AsyncIOScheduler, job_id: str) -> bool:
    """Remove a poll job; return False when it was already gone."""
    try:
        scheduler.remove_job(job_id)
    except JobLookupError:
        return False
    return True
