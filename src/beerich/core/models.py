"""Domain models for the BeeRich application."""

from __future__ import annotations

import uuid

from tortoise import fields, models

DEFAULT_CURRENCY_CODE = "USD"


class BaseModel(models.Model):
    """Abstract base model with common fields."""

    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True


class User(BaseModel):
    """Represents a person tracking their income."""

    telegram_id = fields.BigIntField(unique=True)
    name = fields.CharField(max_length=255, default="")

    invoices: fields.ReverseRelation[Invoice]

    def __str__(self) -> str:
        return self.name or str(self.telegram_id)


class Invoice(BaseModel):
    """Represents a single income entry owned by one user."""

    title = fields.CharField(max_length=255)
    description = fields.TextField(default="")
    amount = fields.DecimalField(max_digits=10, decimal_places=2)
    currency_code = fields.CharField(max_length=3, default=DEFAULT_CURRENCY_CODE)
    attachment = fields.CharField(max_length=255, null=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User", related_name="invoices"
    )

    def __str__(self) -> str:
        return f"{self.title}: {self.amount} {self.currency_code}"


class AttachmentCleanup(BaseModel):
    """An attachment file whose deletion failed and must be retried."""

    file_name = fields.CharField(max_length=255, unique=True)
    attempts = fields.IntField(default=0)
    last_error = fields.TextField(default="")

    def __str__(self) -> str:
        return f"Pending deletion of {self.file_name} ({self.attempts} attempts)"
