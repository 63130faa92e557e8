"""Tests for the InvoiceService outcomes."""

import uuid
from decimal import Decimal

import pytest

from beerich.core.errors import StoreError
from beerich.core.models import Invoice
from beerich.services.invoices import InvoiceService
from beerich.services.outcomes import ErrorKind, Failure, Ok


def make_form(**overrides):
    form = {"title": "Freelance gig", "description": "", "amount": "250"}
    form.update(overrides)
    return form


@pytest.mark.asyncio
async def test_create_invoice_ok(invoice_service, user):
    outcome = await invoice_service.create_invoice(make_form(), user.id)

    assert isinstance(outcome, Ok)
    assert outcome.ok
    assert outcome.value.currency_code == "USD"
    assert outcome.value.user_id == user.id
    assert outcome.value.amount == Decimal("250.00")


@pytest.mark.asyncio
async def test_create_invoice_validation_failure_stores_nothing(
    invoice_service, user
):
    outcome = await invoice_service.create_invoice(make_form(amount="abc"), user.id)

    assert isinstance(outcome, Failure)
    assert not outcome.ok
    assert outcome.kind is ErrorKind.VALIDATION
    assert await Invoice.all().count() == 0


@pytest.mark.asyncio
async def test_get_invoice_of_other_user_is_not_found(
    invoice_service, user, other_user
):
    created = await invoice_service.create_invoice(make_form(), user.id)

    outcome = await invoice_service.get_invoice(created.value.id, other_user.id)

    assert outcome == Failure(ErrorKind.NOT_FOUND, f"Invoice {created.value.id} not found.")


@pytest.mark.asyncio
async def test_cross_tenant_mutations_are_not_found(invoice_service, user, other_user):
    created = await invoice_service.create_invoice(make_form(), user.id)
    invoice_id = created.value.id

    deleted = await invoice_service.delete_invoice(invoice_id, other_user.id)
    updated = await invoice_service.update_invoice(
        invoice_id, other_user.id, make_form(title="Mine now")
    )
    missing = await invoice_service.delete_invoice(uuid.uuid4(), other_user.id)

    assert deleted.kind is ErrorKind.NOT_FOUND
    assert updated.kind is ErrorKind.NOT_FOUND
    # Another user's invoice is indistinguishable from a missing one
    assert type(deleted) is type(missing)
    assert (await Invoice.get(id=invoice_id)).title == "Freelance gig"


@pytest.mark.asyncio
async def test_update_invoice_keeps_attachment_when_form_has_none(
    invoice_service, attachments, user
):
    file_name = attachments.save("invoice.pdf", b"%PDF-1.4")
    created = await invoice_service.create_invoice(
        make_form(attachment=file_name), user.id
    )

    outcome = await invoice_service.update_invoice(
        created.value.id, user.id, make_form(description="Paid late")
    )

    assert isinstance(outcome, Ok)
    assert outcome.value.description == "Paid late"
    assert outcome.value.attachment == file_name
    assert attachments.path_for(file_name).exists()


@pytest.mark.asyncio
async def test_update_invoice_replaces_attachment(invoice_service, attachments, user):
    old_file = attachments.save("old.pdf", b"old")
    new_file = attachments.save("new.pdf", b"new")
    created = await invoice_service.create_invoice(
        make_form(attachment=old_file), user.id
    )

    outcome = await invoice_service.update_invoice(
        created.value.id, user.id, make_form(attachment=new_file)
    )

    assert outcome.value.attachment == new_file
    assert not attachments.path_for(old_file).exists()
    assert attachments.path_for(new_file).exists()


@pytest.mark.asyncio
async def test_update_invoice_validation_failure(invoice_service, user):
    created = await invoice_service.create_invoice(make_form(), user.id)

    outcome = await invoice_service.update_invoice(
        created.value.id, user.id, make_form(amount="")
    )

    assert outcome.kind is ErrorKind.VALIDATION
    assert (await Invoice.get(id=created.value.id)).amount == Decimal("250.00")


@pytest.mark.asyncio
async def test_delete_invoice_ok(invoice_service, user):
    created = await invoice_service.create_invoice(make_form(), user.id)

    outcome = await invoice_service.delete_invoice(created.value.id, user.id)

    assert outcome == Ok(None)
    assert await Invoice.all().count() == 0


@pytest.mark.asyncio
async def test_remove_attachment_ok(invoice_service, attachments, user):
    file_name = attachments.save("invoice.pdf", b"%PDF-1.4")
    created = await invoice_service.create_invoice(
        make_form(attachment=file_name), user.id
    )

    outcome = await invoice_service.remove_attachment(
        created.value.id, user.id, file_name
    )

    assert outcome.value.attachment is None
    assert not attachments.path_for(file_name).exists()


@pytest.mark.asyncio
async def test_list_invoices_with_unusable_page_falls_back_to_first(
    invoice_service, user, make_invoices
):
    await make_invoices(user, 12)

    outcome = await invoice_service.list_invoices(user.id, page="abc")

    assert outcome.value.page == 1
    assert outcome.value.count == 12
    assert len(outcome.value.invoices) == 10
    assert outcome.value.has_next


class BrokenRepository:
    async def list_page(self, user_id, search=None, page=1):
        raise StoreError("Record store failure: database is locked")


@pytest.mark.asyncio
async def test_store_errors_become_store_failures(user):
    service = InvoiceService(invoice_repo=BrokenRepository())

    outcome = await service.list_invoices(user.id)

    assert outcome.kind is ErrorKind.STORE
    assert "database is locked" in outcome.message


@pytest.mark.asyncio
async def test_overlong_title_is_a_validation_failure(invoice_service, user):
    created = await invoice_service.create_invoice(make_form(title="x" * 256), user.id)

    assert created.kind is ErrorKind.VALIDATION
    assert await Invoice.all().count() == 0

    existing = await invoice_service.create_invoice(make_form(), user.id)
    updated = await invoice_service.update_invoice(
        existing.value.id, user.id, make_form(title="x" * 300)
    )

    assert updated.kind is ErrorKind.VALIDATION
    assert (await Invoice.get(id=existing.value.id)).title == "Freelance gig"
