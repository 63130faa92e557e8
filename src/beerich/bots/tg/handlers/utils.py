from __future__ import annotations

from aiogram import html
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from beerich.bots.tg.keyboards.inline import (
    EditFieldCallback,
    InvoiceActionCallback,
    InvoicePageCallback,
)
from beerich.core.models import Invoice
from beerich.core.queries import InvoicePage
from beerich.services.outcomes import ErrorKind, Failure

FAILURE_MESSAGES = {
    ErrorKind.NOT_FOUND: "Invoice not found.",
    ErrorKind.STORE: "❌ Something went wrong on our side. Please try again later.",
}


def describe_failure(failure: Failure) -> str:
    """Turns a failed outcome into a message for the user."""
    if failure.kind is ErrorKind.VALIDATION:
        return f"⚠️ {html.quote(failure.message)}"
    return FAILURE_MESSAGES[failure.kind]


def format_amount(invoice: Invoice) -> str:
    return f"{invoice.amount:,.2f} {invoice.currency_code}"


def format_invoice(invoice: Invoice) -> str:
    """Renders the detail view of an invoice."""
    lines = [
        html.bold(html.quote(invoice.title)),
        f"<i>{invoice.created_at:%m/%d/%Y}</i>",
        "",
        f"Amount: <b>{format_amount(invoice)}</b>",
    ]
    if invoice.description:
        lines.append(f"Description: {html.quote(invoice.description)}")
    if invoice.attachment:
        lines.append(f"Attachment: {html.quote(invoice.attachment)}")
    return "\n".join(lines)


def format_page(result: InvoicePage, search: str = "") -> str:
    """Renders the heading of an income list page."""
    if search:
        heading = f"Your income matching «{html.quote(search)}»"
    else:
        heading = "Your income"
    if not result.invoices:
        return f"{heading}\n\nNothing here yet."
    return f"{heading} (page {result.page}, {result.count} in total):"


def get_page_keyboard(result: InvoicePage) -> InlineKeyboardMarkup:
    """
    Builds one button per invoice plus Previous/Next buttons.

    Previous is offered from the second page on; Next only while more
    invoices exist beyond the current page.
    """
    builder = InlineKeyboardBuilder()
    for invoice in result.invoices:
        builder.row(
            InlineKeyboardButton(
                text=f"{invoice.title} · {format_amount(invoice)}",
                callback_data=InvoiceActionCallback(
                    action="view", id=str(invoice.id)
                ).pack(),
            )
        )

    if result.show_pagination:
        nav: list[InlineKeyboardButton] = []
        if result.has_previous:
            nav.append(
                InlineKeyboardButton(
                    text="⬅️ Previous",
                    callback_data=InvoicePageCallback(page=result.page - 1).pack(),
                )
            )
        if result.has_next:
            nav.append(
                InlineKeyboardButton(
                    text="Next ➡️",
                    callback_data=InvoicePageCallback(page=result.page + 1).pack(),
                )
            )
        if nav:
            builder.row(*nav)
    return builder.as_markup()


def get_invoice_keyboard(invoice: Invoice) -> InlineKeyboardMarkup:
    """Builds the action buttons shown under an invoice."""
    invoice_id = str(invoice.id)
    builder = InlineKeyboardBuilder()
    builder.row(
        *(
            InlineKeyboardButton(
                text=f"✏️ {label}",
                callback_data=EditFieldCallback(field=field, id=invoice_id).pack(),
            )
            for field, label in (
                ("title", "Title"),
                ("description", "Description"),
                ("amount", "Amount"),
            )
        )
    )
    if invoice.attachment:
        builder.row(
            InlineKeyboardButton(
                text="📎 Download attachment",
                callback_data=InvoiceActionCallback(action="file", id=invoice_id).pack(),
            ),
            InlineKeyboardButton(
                text="🗑 Remove attachment",
                callback_data=InvoiceActionCallback(
                    action="rmatt", id=invoice_id
                ).pack(),
            ),
        )
    builder.row(
        InlineKeyboardButton(
            text="❌ Delete invoice",
            callback_data=InvoiceActionCallback(action="del", id=invoice_id).pack(),
        )
    )
    return builder.as_markup()
