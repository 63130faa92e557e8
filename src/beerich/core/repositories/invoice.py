"""Repository for Invoice model."""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from tortoise import timezone
from tortoise.transactions import in_transaction

from beerich.core.attachments import AttachmentStore
from beerich.core.errors import NotFoundError, StoreError
from beerich.core.models import DEFAULT_CURRENCY_CODE, Invoice
from beerich.core.queries import InvoicePage, InvoiceQuery
from beerich.core.repositories.attachment_cleanup import AttachmentCleanupRepository
from beerich.core.repositories.base import BaseRepository, store_errors

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description", "amount", "attachment"})


def _as_uuid(value: UUID | str) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class InvoiceRepository(BaseRepository[Invoice]):
    """
    Invoice-specific repository operations.

    Every lookup and mutation is scoped by the (id, user) compound key, so an
    invoice owned by someone else behaves exactly like a missing one.
    """

    def __init__(
        self,
        attachments: AttachmentStore,
        cleanup_repo: AttachmentCleanupRepository | None = None,
    ) -> None:
        super().__init__(Invoice)
        self._attachments = attachments
        self._cleanup_repo = cleanup_repo or AttachmentCleanupRepository()

    async def create(
        self,
        *,
        title: str,
        description: str,
        amount: Decimal,
        attachment: str | None,
        user_id: UUID,
    ) -> Invoice:
        """Persists a new invoice owned by ``user_id`` in the default currency."""
        with store_errors():
            invoice = await self.model.create(
                title=title,
                description=description,
                amount=amount,
                currency_code=DEFAULT_CURRENCY_CODE,
                attachment=attachment,
                user_id=user_id,
            )
        logger.info(f"Created invoice {invoice.id} for user {user_id}.")
        return invoice

    async def get_owned(self, invoice_id: UUID | str, user_id: UUID) -> Invoice:
        """Get an invoice by its compound key or raise NotFoundError."""
        pk = _as_uuid(invoice_id)
        if pk is None:
            raise NotFoundError(invoice_id)
        with store_errors():
            invoice = await self.model.get_or_none(id=pk, user_id=user_id)
        if invoice is None:
            raise NotFoundError(invoice_id)
        return invoice

    async def delete(self, invoice_id: UUID | str, user_id: UUID) -> None:
        """
        Deletes an owned invoice, then its attachment file.

        The file deletion happens after the record is gone and never undoes
        it; a failed file deletion is queued for the cleanup job instead.
        """
        pk = _as_uuid(invoice_id)
        if pk is None:
            raise NotFoundError(invoice_id)

        with store_errors():
            async with in_transaction() as conn:
                invoice = await self.model.get_or_none(
                    id=pk, user_id=user_id, using_db=conn
                )
                if invoice is None:
                    raise NotFoundError(invoice_id)
                await invoice.delete(using_db=conn)
        logger.info(f"Deleted invoice {pk} for user {user_id}.")

        if invoice.attachment:
            await self.discard_attachment(invoice.attachment)

    async def update(
        self, invoice_id: UUID | str, user_id: UUID, **fields: Any
    ) -> Invoice:
        """
        Replaces the given fields of an owned invoice.

        Only ``title``, ``description``, ``amount`` and ``attachment`` may be
        passed; fields that are not passed keep their current value.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update invoice fields: {', '.join(sorted(unknown))}")

        pk = _as_uuid(invoice_id)
        if pk is None:
            raise NotFoundError(invoice_id)

        scoped = self.model.filter(id=pk, user_id=user_id)
        with store_errors():
            if fields:
                updated = await scoped.update(**fields, updated_at=timezone.now())
            else:
                updated = await scoped.count()
            if not updated:
                raise NotFoundError(invoice_id)
            invoice = await scoped.first()
        if invoice is None:
            raise NotFoundError(invoice_id)
        logger.info(f"Updated invoice {pk} ({', '.join(sorted(fields))}).")
        return invoice

    async def remove_attachment(
        self, invoice_id: UUID | str, user_id: UUID, file_name: str
    ) -> Invoice:
        """
        Deletes the attachment file, then clears the invoice's reference to it.

        ``file_name`` must be the invoice's current attachment.
        """
        invoice = await self.get_owned(invoice_id, user_id)
        if invoice.attachment != file_name:
            raise NotFoundError(invoice_id)
        await self.discard_attachment(file_name)
        return await self.update(invoice.id, user_id, attachment=None)

    async def list_page(
        self, user_id: UUID, search: str | None = None, page: int = 1
    ) -> InvoicePage:
        """
        Returns one page of a user's invoices, newest first, plus the total
        count of invoices whose title contains ``search``.
        """
        query = InvoiceQuery(user_id=user_id, search=search or "", page=max(page, 1))
        with store_errors():
            count, invoices = await asyncio.gather(
                query.count_queryset().count(),
                query.page_queryset(),
            )
        return InvoicePage(
            count=count,
            invoices=list(invoices),
            page=query.page,
            page_size=query.page_size,
        )

    async def discard_attachment(self, file_name: str) -> None:
        """Deletes an attachment file, queueing it for the cleanup job on failure."""
        try:
            self._attachments.delete(file_name)
        except (OSError, StoreError) as e:
            logger.warning(
                f"Could not delete attachment {file_name}, queued for cleanup: {e}"
            )
            try:
                await self._cleanup_repo.enqueue(file_name, str(e))
            except StoreError:
                logger.error(
                    f"Could not queue attachment {file_name} for cleanup.",
                    exc_info=True,
                )
