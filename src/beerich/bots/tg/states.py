"""FSM states for the bot."""

from aiogram.fsm.state import State, StatesGroup


class InvoiceEntry(StatesGroup):
    """States for the invoice creation process."""

    enter_title = State()
    enter_description = State()
    enter_amount = State()
    attach_file = State()


class InvoiceEdit(StatesGroup):
    """States for editing one field of an invoice."""

    enter_value = State()


class IncomeSearch(StatesGroup):
    """States for searching invoices by title."""

    enter_query = State()
