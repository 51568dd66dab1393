"""Scheduled Tasks — periodic housekeeping run by APScheduler's AsyncIOScheduler.

Invariants:
    - erase_orphan_files deletes temp uploads older than orphan_file_max_age_hours
      (or with a foreign name); it never touches <public_dir>/movie
    - recalculate_movie_like_counts reconciles every movie's counters with movie_user_like
    - Job failures propagate to APScheduler, which logs them
    - The scheduler is started/stopped by the FastAPI lifespan only

Design Decisions:
    - Jobs open their own session from db_manager: there is no request context
    - max_instances=1 + coalesce: a slow run is never overlapped by the next tick
"""

import logging
import time

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from movie_catalog.config import Settings
from movie_catalog.infrastructure import database
from movie_catalog.infrastructure.file_storage import FileStorage
from movie_catalog.services.movie_service import recalculate_like_counts

logger = logging.getLogger(__name__)

_HOUR_MS = 60 * 60 * 1000


async def erase_orphan_files(
    storage: FileStorage, max_age_hours: int, now_ms: int | None = None,
) -> int:
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    orphans = storage.find_orphans(now_ms, max_age_hours * _HOUR_MS)
    deleted = storage.delete_files(orphans)
    if deleted:
        logger.info(
            f"Deleted {deleted} orphaned upload(s)",
            extra={"job": "erase_orphan_files"},
        )
    return deleted


async def recalculate_movie_like_counts() -> int:
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as db:
        changed = await recalculate_like_counts(db)
        await db.commit()
    logger.info(
        f"Like counts reconciled for {changed} movie(s)",
        extra={"job": "recalculate_movie_like_counts"},
    )
    return changed


def build_scheduler(settings: Settings, storage: FileStorage) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler(timezone="UTC")
    scheduler.add_job(
        erase_orphan_files,
        "interval",
        minutes=settings.orphan_cleanup_interval_minutes,
        kwargs={
            "storage": storage,
            "max_age_hours": settings.orphan_file_max_age_hours,
        },
        id="erase_orphan_files",
        max_instances=1,
        coalesce=True,
    )
    scheduler.add_job(
        recalculate_movie_like_counts,
        "interval",
        minutes=settings.like_count_interval_minutes,
        id="recalculate_movie_like_counts",
        max_instances=1,
        coalesce=True,
    )
    return scheduler
