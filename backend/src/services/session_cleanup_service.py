"""
Scheduler that purges expired login sessions.

Expired sessions are already rejected (and deleted) when presented, so this
job only keeps the ``sessions`` table from accumulating rows that nobody
presents again.
"""

import asyncio
import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore
from apscheduler.triggers.cron import CronTrigger  # type: ignore

from core import config
from core.constants import SESSION_CLEANUP_MAX_INSTANCES
from core.database import get_db_context
from services.session_service import SessionService
from utils.datetime_utils import MEXICO_TZ

logger = logging.getLogger(__name__)

# Global singleton instance
_session_cleanup_scheduler: Optional['SessionCleanupScheduler'] = None


class SessionCleanupScheduler:
    """
    Runs the expired-session purge once a day in clinic local time.

    Database sessions are created fresh for each run.
    """

    JOB_ID = "expired_session_cleanup"

    def __init__(self, hour: Optional[int] = None):
        self.hour = config.SESSION_CLEANUP_HOUR if hour is None else hour
        self.scheduler = AsyncIOScheduler(timezone=MEXICO_TZ)
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    async def start_scheduler(self) -> None:
        """Register the daily job and start the scheduler."""
        if self._is_started:
            logger.warning("Session cleanup scheduler is already started")
            return

        self.scheduler.add_job(  # type: ignore
            self.run_cleanup,
            CronTrigger(hour=self.hour, minute=0, timezone=MEXICO_TZ),
            id=self.JOB_ID,
            name="Expired session cleanup",
            replace_existing=True,
            max_instances=SESSION_CLEANUP_MAX_INSTANCES,
            misfire_grace_time=3600,
        )

        self.scheduler.start()
        self._is_started = True
        logger.info(f"Session cleanup scheduler started (runs daily at {self.hour:02d}:00 clinic time)")

    async def stop_scheduler(self) -> None:
        """Stop the scheduler."""
        if self._is_started:
            self.scheduler.shutdown(wait=True)
            self._is_started = False
            logger.info("Session cleanup scheduler stopped")

    async def run_cleanup(self) -> None:
        """Run one purge off the event loop."""
        logger.info("Starting scheduled session cleanup...")
        await asyncio.to_thread(self.execute_cleanup)

    def execute_cleanup(self) -> int:
        """
        Purge expired sessions in a fresh database session.

        Failures are logged and reported as zero so the scheduler keeps
        running; the next run retries.

        Returns:
            Number of sessions removed
        """
        try:
            with get_db_context() as db:
                deleted = SessionService.purge_expired_sessions(db)
        except Exception as e:
            logger.exception(f"Error during scheduled session cleanup: {e}")
            return 0

        logger.info(f"Scheduled session cleanup completed, removed {deleted} sessions")
        return deleted


def get_session_cleanup_scheduler() -> SessionCleanupScheduler:
    """Get the global session cleanup scheduler instance."""
    global _session_cleanup_scheduler
    if _session_cleanup_scheduler is None:
        _session_cleanup_scheduler = SessionCleanupScheduler()
    return _session_cleanup_scheduler


async def start_session_cleanup_scheduler() -> None:
    """Start the global session cleanup scheduler."""
    scheduler = get_session_cleanup_scheduler()
    await scheduler.start_scheduler()


async def stop_session_cleanup_scheduler() -> None:
    """Stop the global session cleanup scheduler."""
    global _session_cleanup_scheduler
    if _session_cleanup_scheduler:
        await _session_cleanup_scheduler.stop_scheduler()
