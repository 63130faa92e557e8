"""Listing parameters for invoices: owner scope, title search and paging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from beerich.core.models import Invoice

PAGE_SIZE = 10


def parse_page_number(raw: str | int | None) -> int:
    """Parses a 1-based page number, falling back to 1 for anything unusable."""
    if raw is None or raw == "":
        return 1
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


@dataclass(frozen=True)
class InvoiceQuery:
    """Describes one page of a user's invoices."""

    user_id: UUID
    search: str = ""
    page: int = 1
    page_size: int = PAGE_SIZE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        return self.page_size

    def filters(self) -> dict[str, Any]:
        """Keyword filters shared by the count and the page query."""
        filters: dict[str, Any] = {"user_id": self.user_id}
        if self.search:
            filters["title__contains"] = self.search
        return filters

    def ordering(self) -> tuple[str, ...]:
        # id breaks ties between equal timestamps so pages stay stable
        return ("-created_at", "-id")

    def count_queryset(self):
        return Invoice.filter(**self.filters())

    def page_queryset(self):
        return (
            Invoice.filter(**self.filters())
            .order_by(*self.ordering())
            .offset(self.skip)
            .limit(self.take)
        )


@dataclass(frozen=True)
class InvoicePage:
    """A page of invoices together with the total matching count."""

    count: int
    invoices: list[Invoice]
    page: int = 1
    page_size: int = PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.count > self.page * self.page_size

    @property
    def show_pagination(self) -> bool:
        return self.count > self.page_size or self.page != 1
