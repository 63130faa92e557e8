"""Tests for the bot's rendering helpers."""

import uuid
from datetime import datetime
from decimal import Decimal

import pytest

from beerich.bots.tg.handlers.utils import (
    describe_failure,
    format_invoice,
    get_invoice_keyboard,
    get_page_keyboard,
)
from beerich.bots.tg.keyboards.inline import InvoicePageCallback
from beerich.core.models import Invoice
from beerich.core.queries import InvoicePage
from beerich.services.outcomes import ErrorKind, Failure


def make_invoice(**overrides) -> Invoice:
    data = {
        "id": uuid.uuid4(),
        "title": "Consulting <ACME>",
        "description": "",
        "amount": Decimal("1234.50"),
        "currency_code": "USD",
        "attachment": None,
        "created_at": datetime(2024, 3, 5, 12, 0),
    }
    data.update(overrides)
    return Invoice(**data)


def nav_pages(markup) -> list[int]:
    pages = []
    for row in markup.inline_keyboard:
        for button in row:
            if button.callback_data.startswith(InvoicePageCallback.__prefix__):
                pages.append(InvoicePageCallback.unpack(button.callback_data).page)
    return pages


@pytest.mark.parametrize(
    "page, count, expected_pages",
    [
        (1, 5, []),
        (1, 15, [2]),
        (2, 15, [1]),
        (2, 25, [1, 3]),
    ],
)
def test_page_keyboard_navigation(page, count, expected_pages):
    result = InvoicePage(count=count, invoices=[make_invoice()], page=page)

    markup = get_page_keyboard(result)

    assert nav_pages(markup) == expected_pages
    assert "1,234.50 USD" in markup.inline_keyboard[0][0].text


def test_format_invoice_escapes_html():
    text = format_invoice(make_invoice(description="a < b", attachment="x-file.pdf"))

    assert "Consulting &lt;ACME&gt;" in text
    assert "a &lt; b" in text
    assert "03/05/2024" in text
    assert "x-file.pdf" in text


def test_invoice_keyboard_offers_attachment_actions_only_when_attached():
    without = get_invoice_keyboard(make_invoice())
    with_file = get_invoice_keyboard(make_invoice(attachment="x-file.pdf"))

    assert len(with_file.inline_keyboard) == len(without.inline_keyboard) + 1


@pytest.mark.parametrize(
    "failure, expected",
    [
        (Failure(ErrorKind.NOT_FOUND, "Invoice 1 not found."), "Invoice not found."),
        (Failure(ErrorKind.VALIDATION, "Invalid amount: 'x'"), "Invalid amount"),
        (Failure(ErrorKind.STORE, "boom"), "Something went wrong"),
    ],
)
def test_describe_failure(failure, expected):
    assert expected in describe_failure(failure)
