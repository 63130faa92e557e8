"""Base repository for common CRUD operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, Type, TypeVar
from uuid import UUID

from tortoise.exceptions import BaseORMException
from tortoise.models import Model

from beerich.core.errors import StoreError

ModelType = TypeVar("ModelType", bound=Model)


@contextmanager
def store_errors() -> Iterator[None]:
    """Re-raises database failures as StoreError."""
    try:
        yield
    except BaseORMException as e:
        raise StoreError(f"Record store failure: {e}") from e


class BaseRepository(Generic[ModelType]):
    """Generic repository with basic CRUD methods."""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, pk: UUID) -> ModelType | None:
        """Get a model instance by its primary key."""
        with store_errors():
            return await self.model.get_or_none(id=pk)

    async def get_or_create(
        self, defaults: dict | None = None, **kwargs
    ) -> tuple[ModelType, bool]:
        """Get or create a model instance."""
        with store_errors():
            return await self.model.get_or_create(defaults=defaults, **kwargs)

    async def all(self) -> list[ModelType]:
        """Get all model instances."""
        with store_errors():
            return await self.model.all()

    async def create(self, **kwargs) -> ModelType:
        """Create a new model instance."""
        with store_errors():
            return await self.model.create(**kwargs)

    async def delete(self, pk: UUID) -> int:
        """Delete a model instance by its primary key."""
        with store_errors():
            return await self.model.filter(id=pk).delete()
