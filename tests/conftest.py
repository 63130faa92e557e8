"""Pytest configuration and fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from tortoise import Tortoise, timezone

from beerich.core.attachments import LocalAttachmentStore
from beerich.core.models import Invoice, User
from beerich.core.repositories.attachment_cleanup import AttachmentCleanupRepository
from beerich.core.repositories.invoice import InvoiceRepository
from beerich.services.invoices import InvoiceService


@pytest_asyncio.fixture(scope="function", autouse=True)
async def db_session():
    """
    Provides a clean in-memory SQLite database for each test function.
    """
    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["beerich.core.models"]},
    )
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


class FailingAttachmentStore(LocalAttachmentStore):
    """Attachment store whose deletions always fail."""

    def delete(self, file_name: str) -> None:
        raise OSError("attachment storage unavailable")


@pytest.fixture
def attachments(tmp_path) -> LocalAttachmentStore:
    return LocalAttachmentStore(tmp_path / "uploads")


@pytest.fixture
def failing_attachments(tmp_path) -> FailingAttachmentStore:
    return FailingAttachmentStore(tmp_path / "uploads")


@pytest.fixture
def invoice_repo(attachments) -> InvoiceRepository:
    return InvoiceRepository(attachments, AttachmentCleanupRepository())


@pytest.fixture
def invoice_service(invoice_repo) -> InvoiceService:
    return InvoiceService(invoice_repo=invoice_repo)


@pytest_asyncio.fixture
async def user() -> User:
    return await User.create(telegram_id=1001, name="Alice")


@pytest_asyncio.fixture
async def other_user() -> User:
    return await User.create(telegram_id=2002, name="Bob")


async def _make_invoices(user: User, count: int, title: str = "Invoice") -> list[Invoice]:
    """Creates ``count`` invoices one minute apart; the last one is the newest."""
    start = timezone.now() - timedelta(days=1)
    invoices = []
    for i in range(count):
        invoice = await Invoice.create(
            title=f"{title} {i + 1}",
            amount=Decimal("10.00") + i,
            user=user,
        )
        created_at = start + timedelta(minutes=i)
        await Invoice.filter(id=invoice.id).update(created_at=created_at)
        invoice.created_at = created_at
        invoices.append(invoice)
    return invoices


@pytest.fixture
def make_invoices():
    return _make_invoices
