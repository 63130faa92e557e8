"""Reply keyboard builders."""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

BTN_INCOME = "💰 My income"
BTN_ADD = "➕ Add invoice"
BTN_SEARCH = "🔎 Search by title"


def get_main_menu() -> ReplyKeyboardMarkup:
    """Builds the main menu reply keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(
        KeyboardButton(text=BTN_INCOME),
        KeyboardButton(text=BTN_ADD),
    )
    builder.row(KeyboardButton(text=BTN_SEARCH))
    return builder.as_markup(resize_keyboard=True)
