"""Inline keyboard builders."""

from aiogram.filters.callback_data import CallbackData


class InvoicePageCallback(CallbackData, prefix="page"):
    """Callback data for moving between pages of the income list."""

    page: int


class InvoiceActionCallback(CallbackData, prefix="inv"):
    """
    Callback data for actions on a single invoice.
    - view: show the invoice
    - del: delete the invoice
    - rmatt: remove its attachment
    - file: send its attachment
    """

    action: str
    id: str


class EditFieldCallback(CallbackData, prefix="edit"):
    """Callback data for choosing which invoice field to edit."""

    field: str  # title, description or amount
    id: str
