"""Repository for User model."""

from __future__ import annotations

from beerich.core.models import User
from beerich.core.repositories.base import BaseRepository, store_errors


class UserRepository(BaseRepository[User]):
    """User-specific repository operations."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_telegram_id(self, telegram_id: int) -> User | None:
        """Get a user by their Telegram account id."""
        with store_errors():
            return await self.model.get_or_none(telegram_id=telegram_id)

    async def ensure(self, telegram_id: int, name: str = "") -> User:
        """Returns the user for a Telegram account, creating it on first contact."""
        user, _ = await self.get_or_create(
            defaults={"name": name}, telegram_id=telegram_id
        )
        return user
