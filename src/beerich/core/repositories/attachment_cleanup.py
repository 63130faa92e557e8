"""Repository for AttachmentCleanup model."""

from __future__ import annotations

from beerich.core.models import AttachmentCleanup
from beerich.core.repositories.base import BaseRepository, store_errors


class AttachmentCleanupRepository(BaseRepository[AttachmentCleanup]):
    """Queue of attachment files still waiting to be deleted."""

    def __init__(self) -> None:
        super().__init__(AttachmentCleanup)

    async def enqueue(self, file_name: str, error: str) -> AttachmentCleanup:
        """Queues a file for deletion, reusing an existing entry for the same name."""
        entry, created = await self.get_or_create(
            defaults={"last_error": error}, file_name=file_name
        )
        if not created:
            entry.last_error = error
            with store_errors():
                await entry.save(update_fields=["last_error", "updated_at"])
        return entry

    async def pending(self, max_attempts: int) -> list[AttachmentCleanup]:
        """Entries that have not yet exhausted their retries, oldest first."""
        with store_errors():
            return await self.model.filter(attempts__lt=max_attempts).order_by(
                "created_at"
            )

    async def record_failure(self, entry: AttachmentCleanup, error: str) -> None:
        """Counts a failed retry against an entry."""
        entry.attempts += 1
        entry.last_error = error
        with store_errors():
            await entry.save(update_fields=["attempts", "last_error", "updated_at"])
