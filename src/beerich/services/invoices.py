"""Service the page controllers call to work with invoices."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from beerich.core.errors import BeeRichError
from beerich.core.models import Invoice
from beerich.core.queries import InvoicePage, parse_page_number
from beerich.core.repositories.invoice import InvoiceRepository
from beerich.core.validation import parse_invoice
from beerich.services.outcomes import ErrorKind, Failure, Ok, Outcome, failure_from

logger = logging.getLogger(__name__)


class InvoiceService:
    """
    Runs validation and repository calls for one request.

    Every method returns an ``Ok`` with the result or a ``Failure`` tagged
    with an ``ErrorKind``; domain exceptions never reach the caller.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self._invoice_repo = invoice_repo

    async def list_invoices(
        self,
        user_id: UUID,
        search: str | None = None,
        page: str | int | None = None,
    ) -> Outcome[InvoicePage]:
        """Lists one page of the user's invoices matching ``search``."""
        try:
            result = await self._invoice_repo.list_page(
                user_id, search=search, page=parse_page_number(page)
            )
        except BeeRichError as e:
            return self._fail("list invoices", e)
        return Ok(result)

    async def get_invoice(
        self, invoice_id: UUID | str, user_id: UUID
    ) -> Outcome[Invoice]:
        try:
            invoice = await self._invoice_repo.get_owned(invoice_id, user_id)
        except BeeRichError as e:
            return self._fail("get invoice", e)
        return Ok(invoice)

    async def create_invoice(
        self, form: Mapping[str, Any], user_id: UUID
    ) -> Outcome[Invoice]:
        """Validates a submitted form and stores a new invoice."""
        try:
            payload = parse_invoice(form)
            invoice = await self._invoice_repo.create(
                title=payload.title,
                description=payload.description,
                amount=payload.amount,
                attachment=payload.attachment,
                user_id=user_id,
            )
        except BeeRichError as e:
            return self._fail("create invoice", e)
        return Ok(invoice)

    async def update_invoice(
        self, invoice_id: UUID | str, user_id: UUID, form: Mapping[str, Any]
    ) -> Outcome[Invoice]:
        """
        Validates a submitted form and replaces the invoice's fields.

        A form without an attachment keeps the current one. A new attachment
        replaces the current one, whose file is then deleted.
        """
        try:
            payload = parse_invoice(form)
            fields: dict[str, Any] = {
                "title": payload.title,
                "description": payload.description,
                "amount": payload.amount,
            }
            previous = None
            if payload.attachment is not None:
                current = await self._invoice_repo.get_owned(invoice_id, user_id)
                previous = current.attachment
                fields["attachment"] = payload.attachment
            invoice = await self._invoice_repo.update(invoice_id, user_id, **fields)
            if previous and previous != payload.attachment:
                await self._invoice_repo.discard_attachment(previous)
        except BeeRichError as e:
            return self._fail("update invoice", e)
        return Ok(invoice)

    async def delete_invoice(
        self, invoice_id: UUID | str, user_id: UUID
    ) -> Outcome[None]:
        try:
            await self._invoice_repo.delete(invoice_id, user_id)
        except BeeRichError as e:
            return self._fail("delete invoice", e)
        return Ok(None)

    async def remove_attachment(
        self, invoice_id: UUID | str, user_id: UUID, file_name: str
    ) -> Outcome[Invoice]:
        try:
            invoice = await self._invoice_repo.remove_attachment(
                invoice_id, user_id, file_name
            )
        except BeeRichError as e:
            return self._fail("remove attachment", e)
        return Ok(invoice)

    @staticmethod
    def _fail(action: str, error: BeeRichError) -> Failure:
        failure = failure_from(error)
        if failure.kind is ErrorKind.STORE:
            logger.error(f"Failed to {action}: {failure.message}", exc_info=error)
        else:
            logger.info(f"Could not {action}: {failure.kind.value} ({failure.message})")
        return failure
