"""Common command handlers."""

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from beerich.bots.tg.keyboards.reply import get_main_menu
from beerich.core.models import User

router = Router(name=__name__)


@router.message(CommandStart())
async def handle_start(message: Message, state: FSMContext, user: User) -> None:
    """Greets the user and shows the main menu."""
    await state.clear()
    await message.answer(
        f"Welcome to BeeRich, {user}! 🐝\n"
        "Keep track of your income and attach the matching invoices.",
        reply_markup=get_main_menu(),
    )


@router.message(Command("help"))
async def handle_help(message: Message) -> None:
    """Handler for the /help command."""
    await message.answer(
        "This bot keeps a list of your income.\n\n"
        "• <b>My income</b> shows your invoices, newest first.\n"
        "• <b>Add invoice</b> records a new one, optionally with a file.\n"
        "• <b>Search by title</b> filters the list.\n\n"
        "Send /cancel at any time to stop the current step."
    )


@router.message(Command("cancel"))
async def handle_cancel(message: Message, state: FSMContext) -> None:
    """Aborts whatever multi-step action is in progress."""
    await state.clear()
    await message.answer("Cancelled.", reply_markup=get_main_menu())
