"""Service for scheduling background jobs."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from beerich.core.attachments import AttachmentStore
from beerich.core.errors import StoreError
from beerich.core.models import AttachmentCleanup
from beerich.core.repositories.attachment_cleanup import AttachmentCleanupRepository

logger = logging.getLogger(__name__)


class SchedulerService:
    """Manages scheduled tasks for the application."""

    def __init__(
        self,
        attachments: AttachmentStore,
        cleanup_repo: AttachmentCleanupRepository,
        scheduler: AsyncIOScheduler,
        interval_minutes: int = 15,
        max_attempts: int = 5,
    ):
        self._attachments = attachments
        self._cleanup_repo = cleanup_repo
        self._scheduler = scheduler
        self._interval_minutes = interval_minutes
        self._max_attempts = max_attempts

    def start(self):
        """Starts the scheduler and adds jobs."""
        logger.info("Starting scheduler...")
        self._scheduler.add_job(
            self._run_attachment_cleanup,
            trigger=IntervalTrigger(minutes=self._interval_minutes),
            id="attachment_cleanup",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Scheduler started.")

    def shutdown(self):
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped.")

    async def _run_attachment_cleanup(self) -> int:
        """
        Retries deletion of attachment files left behind by failed deletions.

        Returns the number of files deleted in this run.
        """
        logger.info("Starting attachment cleanup job.")
        entries = await self._cleanup_repo.pending(self._max_attempts)
        deleted = 0

        for entry in entries:
            try:
                if await self._clean_entry(entry):
                    deleted += 1
            except Exception as e:
                logger.error(
                    f"Failed to process cleanup entry for {entry.file_name}: {e}",
                    exc_info=True,
                )

        logger.info(f"Attachment cleanup job finished, {deleted} file(s) deleted.")
        return deleted

    async def _clean_entry(self, entry: AttachmentCleanup) -> bool:
        """Deletes one queued file; returns whether it is gone."""
        try:
            self._attachments.delete(entry.file_name)
        except (OSError, StoreError) as e:
            logger.error(
                f"Failed to delete attachment {entry.file_name} "
                f"(attempt {entry.attempts + 1}): {e}"
            )
            await self._cleanup_repo.record_failure(entry, str(e))
            if entry.attempts >= self._max_attempts:
                logger.warning(
                    f"Giving up on attachment {entry.file_name} after "
                    f"{entry.attempts} attempts."
                )
            return False
        await self._cleanup_repo.delete(entry.id)
        return True
