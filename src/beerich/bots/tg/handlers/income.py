"""Handlers for listing, adding, editing and deleting income invoices."""

from __future__ import annotations

import logging

from aiogram import Bot, F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, FSInputFile, Message

from beerich.bots.tg.handlers.utils import (
    describe_failure,
    format_invoice,
    format_page,
    get_invoice_keyboard,
    get_page_keyboard,
)
from beerich.bots.tg.keyboards.inline import (
    EditFieldCallback,
    InvoiceActionCallback,
    InvoicePageCallback,
)
from beerich.bots.tg.keyboards.reply import BTN_ADD, BTN_INCOME, BTN_SEARCH
from beerich.bots.tg.states import IncomeSearch, InvoiceEdit, InvoiceEntry
from beerich.core.attachments import AttachmentStore
from beerich.core.errors import StoreError, ValidationError
from beerich.core.models import User
from beerich.core.validation import TITLE_MAX_LENGTH, parse_amount
from beerich.services.invoices import InvoiceService
from beerich.services.outcomes import Failure

logger = logging.getLogger(__name__)

router = Router(name=__name__)

EMPTY_DESCRIPTION = "-"


async def _send_page(
    message: Message,
    invoice_service: InvoiceService,
    user: User,
    search: str,
    page: int | str | None,
    edit: bool = False,
) -> None:
    outcome = await invoice_service.list_invoices(user.id, search=search, page=page)
    if isinstance(outcome, Failure):
        await message.answer(describe_failure(outcome))
        return

    text = format_page(outcome.value, search)
    markup = get_page_keyboard(outcome.value)
    if edit:
        await message.edit_text(text, reply_markup=markup)
    else:
        await message.answer(text, reply_markup=markup)


# --- Menu, listing and search ---
@router.message(F.text == BTN_INCOME)
async def handle_income_list(
    message: Message, state: FSMContext, invoice_service: InvoiceService, user: User
):
    """Shows the first page of the user's income, without a search filter."""
    await state.clear()
    await _send_page(message, invoice_service, user, search="", page=1)


@router.message(F.text == BTN_SEARCH)
async def handle_search(message: Message, state: FSMContext):
    """Asks for the text to look for in invoice titles."""
    await state.set_state(IncomeSearch.enter_query)
    await message.answer("Send the text to search for in invoice titles:")


@router.message(F.text == BTN_ADD)
async def handle_add_invoice(message: Message, state: FSMContext):
    """Starts the invoice creation process."""
    await state.clear()
    await state.set_state(InvoiceEntry.enter_title)
    await message.answer("Enter the title of the invoice:")


@router.message(IncomeSearch.enter_query)
async def handle_search_query(
    message: Message, state: FSMContext, invoice_service: InvoiceService, user: User
):
    """Stores the search text and shows the first matching page."""
    search = (message.text or "").strip()
    await state.set_state(None)
    await state.update_data(search=search)
    await _send_page(message, invoice_service, user, search=search, page=1)


@router.callback_query(InvoicePageCallback.filter())
async def handle_page(
    query: CallbackQuery,
    callback_data: InvoicePageCallback,
    state: FSMContext,
    invoice_service: InvoiceService,
    user: User,
):
    """Moves to another page of the current listing."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    data = await state.get_data()
    await _send_page(
        query.message,
        invoice_service,
        user,
        search=data.get("search", ""),
        page=callback_data.page,
        edit=True,
    )


# --- Single invoice ---
@router.callback_query(InvoiceActionCallback.filter(F.action == "view"))
async def handle_view(
    query: CallbackQuery,
    callback_data: InvoiceActionCallback,
    invoice_service: InvoiceService,
    user: User,
):
    """Shows an invoice with its action buttons."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    outcome = await invoice_service.get_invoice(callback_data.id, user.id)
    if isinstance(outcome, Failure):
        await query.message.answer(describe_failure(outcome))
        return
    await query.message.answer(
        format_invoice(outcome.value), reply_markup=get_invoice_keyboard(outcome.value)
    )


@router.callback_query(InvoiceActionCallback.filter(F.action == "del"))
async def handle_delete(
    query: CallbackQuery,
    callback_data: InvoiceActionCallback,
    invoice_service: InvoiceService,
    user: User,
):
    """Deletes an invoice together with its attachment."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    outcome = await invoice_service.delete_invoice(callback_data.id, user.id)
    if isinstance(outcome, Failure):
        await query.message.answer(describe_failure(outcome))
        return
    await query.message.edit_text("✅ Invoice deleted.")


@router.callback_query(InvoiceActionCallback.filter(F.action == "rmatt"))
async def handle_remove_attachment(
    query: CallbackQuery,
    callback_data: InvoiceActionCallback,
    invoice_service: InvoiceService,
    user: User,
):
    """Removes the attachment of an invoice."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    outcome = await invoice_service.get_invoice(callback_data.id, user.id)
    if not isinstance(outcome, Failure):
        if not outcome.value.attachment:
            await query.message.answer("This invoice has no attachment.")
            return
        outcome = await invoice_service.remove_attachment(
            callback_data.id, user.id, outcome.value.attachment
        )
    if isinstance(outcome, Failure):
        await query.message.answer(describe_failure(outcome))
        return
    await query.message.edit_text(
        format_invoice(outcome.value), reply_markup=get_invoice_keyboard(outcome.value)
    )


@router.callback_query(InvoiceActionCallback.filter(F.action == "file"))
async def handle_download_attachment(
    query: CallbackQuery,
    callback_data: InvoiceActionCallback,
    invoice_service: InvoiceService,
    attachments: AttachmentStore,
    user: User,
):
    """Sends the attachment of an invoice as a document."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    outcome = await invoice_service.get_invoice(callback_data.id, user.id)
    if isinstance(outcome, Failure):
        await query.message.answer(describe_failure(outcome))
        return
    if not outcome.value.attachment:
        await query.message.answer("This invoice has no attachment.")
        return

    try:
        path = attachments.path_for(outcome.value.attachment)
    except StoreError:
        path = None
    if path is None or not path.exists():
        await query.message.answer("The attachment file is no longer available.")
        return
    await query.message.answer_document(FSInputFile(path), caption=outcome.value.title)


# --- Editing ---
@router.callback_query(EditFieldCallback.filter())
async def handle_edit_field(
    query: CallbackQuery, callback_data: EditFieldCallback, state: FSMContext
):
    """Asks for the new value of the chosen field."""
    if not isinstance(query.message, Message):
        return
    await query.answer()
    await state.set_state(InvoiceEdit.enter_value)
    await state.update_data(invoice_id=callback_data.id, field=callback_data.field)
    hint = (
        f" Send {EMPTY_DESCRIPTION} to clear it."
        if callback_data.field == "description"
        else ""
    )
    await query.message.answer(f"Send the new {callback_data.field}.{hint}")


@router.message(InvoiceEdit.enter_value)
async def handle_edit_value(
    message: Message, state: FSMContext, invoice_service: InvoiceService, user: User
):
    """Applies the new value and shows the updated invoice."""
    data = await state.get_data()
    invoice_id, field = data["invoice_id"], data["field"]

    current = await invoice_service.get_invoice(invoice_id, user.id)
    if isinstance(current, Failure):
        await state.clear()
        await message.answer(describe_failure(current))
        return

    invoice = current.value
    form = {
        "title": invoice.title,
        "description": invoice.description,
        "amount": str(invoice.amount),
    }
    value = message.text or ""
    if field == "description" and value.strip() == EMPTY_DESCRIPTION:
        value = ""
    form[field] = value

    outcome = await invoice_service.update_invoice(invoice_id, user.id, form)
    if isinstance(outcome, Failure):
        # Stay in this state so the user can send a corrected value
        await message.answer(describe_failure(outcome) + "\nPlease try again.")
        return

    await state.clear()
    await message.answer(
        "✅ Changes saved!\n\n" + format_invoice(outcome.value),
        reply_markup=get_invoice_keyboard(outcome.value),
    )


# --- Creation FSM ---
@router.message(InvoiceEntry.enter_title)
async def handle_title(message: Message, state: FSMContext):
    if not message.text or not message.text.strip():
        await message.answer("The title cannot be empty. Please try again.")
        return
    if len(message.text.strip()) > TITLE_MAX_LENGTH:
        await message.answer(
            f"The title can be at most {TITLE_MAX_LENGTH} characters. Please try again."
        )
        return
    await state.update_data(title=message.text.strip())
    await state.set_state(InvoiceEntry.enter_description)
    await message.answer(
        f"Enter a description (or {EMPTY_DESCRIPTION} to leave it empty):"
    )


@router.message(InvoiceEntry.enter_description)
async def handle_description(message: Message, state: FSMContext):
    description = (message.text or "").strip()
    if description == EMPTY_DESCRIPTION:
        description = ""
    await state.update_data(description=description)
    await state.set_state(InvoiceEntry.enter_amount)
    await message.answer("Enter the amount in USD (for example, 12.50):")


@router.message(InvoiceEntry.enter_amount)
async def handle_amount(message: Message, state: FSMContext):
    try:
        parse_amount(message.text or "")
    except ValidationError:
        await message.answer("That is not a valid amount. Please enter a number.")
        return
    await state.update_data(amount=message.text)
    await state.set_state(InvoiceEntry.attach_file)
    await message.answer("Send a file to attach, or /skip to save without one.")


@router.message(InvoiceEntry.attach_file, Command("skip"))
async def handle_skip_attachment(
    message: Message, state: FSMContext, invoice_service: InvoiceService, user: User
):
    await _save_new_invoice(message, state, invoice_service, user, attachment=None)


@router.message(InvoiceEntry.attach_file, F.document)
async def handle_attachment(
    message: Message,
    state: FSMContext,
    bot: Bot,
    invoice_service: InvoiceService,
    attachments: AttachmentStore,
    user: User,
):
    """Stores the uploaded document and saves the invoice with it."""
    document = message.document
    downloaded = await bot.download(document)
    if downloaded is None:
        await message.answer("Could not download the file. Please send it again.")
        return
    try:
        file_name = attachments.save(
            document.file_name or "attachment", downloaded.read()
        )
    except StoreError:
        logger.error("Failed to store uploaded attachment.", exc_info=True)
        await message.answer("Could not store the file. Please try again later.")
        return

    saved = await _save_new_invoice(
        message, state, invoice_service, user, attachment=file_name
    )
    if not saved:
        try:
            attachments.delete(file_name)
        except (OSError, StoreError):
            logger.warning(f"Could not delete unused attachment {file_name}.")


@router.message(InvoiceEntry.attach_file)
async def handle_attachment_invalid(message: Message):
    await message.answer("Please send a file as a document, or /skip.")


async def _save_new_invoice(
    message: Message,
    state: FSMContext,
    invoice_service: InvoiceService,
    user: User,
    attachment: str | None,
) -> bool:
    data = await state.get_data()
    form = {
        "title": data.get("title"),
        "description": data.get("description"),
        "amount": data.get("amount"),
        "attachment": attachment,
    }
    outcome = await invoice_service.create_invoice(form, user.id)
    await state.clear()
    if isinstance(outcome, Failure):
        await message.answer(
            describe_failure(outcome) + f"\nPress «{BTN_ADD}» to start over."
        )
        return False

    await message.answer(
        "✅ Invoice saved!\n\n" + format_invoice(outcome.value),
        reply_markup=get_invoice_keyboard(outcome.value),
    )
    return True
