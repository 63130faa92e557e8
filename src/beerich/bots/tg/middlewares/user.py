"""Middleware that resolves the Telegram account to a BeeRich user."""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from beerich.core.repositories.user import UserRepository


class UserMiddleware(BaseMiddleware):
    """
    Loads (or creates) the user behind an update and passes it to handlers
    as ``user``. Updates without a sender are dropped.
    """

    def __init__(self, user_repo: UserRepository | None = None):
        self._user_repo = user_repo or UserRepository()

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        tg_user = data.get("event_from_user")
        if tg_user is None:
            return None

        data["user"] = await self._user_repo.ensure(
            tg_user.id, name=tg_user.full_name
        )
        return await handler(event, data)
