"""Error kinds surfaced by the invoice core."""

from __future__ import annotations


class BeeRichError(Exception):
    """Base class for all domain errors."""


class ValidationError(BeeRichError):
    """Raised when form input is malformed or an amount is not a finite number."""


class NotFoundError(BeeRichError):
    """Raised when no invoice matches the (id, user) compound key.

    The message never reveals whether the invoice exists for another user.
    """

    def __init__(self, invoice_id: object) -> None:
        super().__init__(f"Invoice {invoice_id} not found.")
        self.invoice_id = invoice_id


class StoreError(BeeRichError):
    """Raised when the record store or the attachment store fails."""
