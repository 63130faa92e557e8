"""Parsing of raw invoice form input."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from beerich.core.errors import ValidationError

CENTS = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")  # DECIMAL(10,2)
TITLE_MAX_LENGTH = 255


class InvoiceForm(BaseModel):
    """Schema of the fields every invoice form must carry."""

    model_config = ConfigDict(extra="ignore", strict=True, str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str
    amount: str


@dataclass(frozen=True)
class InvoicePayload:
    """Clean, typed invoice data ready for the repository."""

    title: str
    description: str
    amount: Decimal
    attachment: str | None


def parse_amount(raw: str) -> Decimal:
    """
    Parses user-supplied text into a finite amount rounded to cents.

    Raises:
        ValidationError: If the text is empty, not a number, NaN or infinite.
    """
    try:
        amount = Decimal(raw.strip())
        if not amount.is_finite():
            raise ValidationError(f"Invalid amount: {raw!r}")
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValidationError(f"Invalid amount: {raw!r}") from e

    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f"Amount out of range: {raw!r}")
    return amount


def parse_invoice(form: Mapping[str, Any]) -> InvoicePayload:
    """
    Validates raw form input and returns a typed payload.

    ``title``, ``description`` and ``amount`` must be present strings; the
    amount must parse to a finite number. A missing or non-string
    ``attachment`` is normalized to ``None``.

    Raises:
        ValidationError: On any malformed or missing field.
    """
    try:
        data = InvoiceForm.model_validate(dict(form))
    except pydantic.ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise ValidationError(f"Invalid invoice fields: {fields}") from e

    attachment = form.get("attachment")
    if not attachment or not isinstance(attachment, str):
        attachment = None

    return InvoicePayload(
        title=data.title,
        description=data.description,
        amount=parse_amount(data.amount),
        attachment=attachment,
    )
