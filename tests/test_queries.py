"""Tests for listing parameters and pagination flags."""

import uuid

import pytest

from beerich.core.queries import PAGE_SIZE, InvoicePage, InvoiceQuery, parse_page_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 1),
        ("", 1),
        ("1", 1),
        ("3", 3),
        (4, 4),
        ("0", 1),
        ("-2", 1),
        ("abc", 1),
        ("2.5", 1),
    ],
)
def test_parse_page_number(raw, expected):
    assert parse_page_number(raw) == expected


@pytest.mark.parametrize("page, skip", [(1, 0), (2, 10), (5, 40)])
def test_query_skip_and_take(page, skip):
    query = InvoiceQuery(user_id=uuid.uuid4(), page=page)
    assert query.skip == skip
    assert query.take == PAGE_SIZE == 10


def test_query_filters_scope_by_owner_and_title():
    user_id = uuid.uuid4()

    assert InvoiceQuery(user_id=user_id).filters() == {"user_id": user_id}
    assert InvoiceQuery(user_id=user_id, search="rent").filters() == {
        "user_id": user_id,
        "title__contains": "rent",
    }


def test_query_orders_newest_first_with_id_tiebreak():
    assert InvoiceQuery(user_id=uuid.uuid4()).ordering() == ("-created_at", "-id")


@pytest.mark.parametrize(
    "page, count, has_previous, has_next, show_pagination",
    [
        (1, 0, False, False, False),
        (1, 10, False, False, False),
        (1, 11, False, True, True),
        (2, 15, True, False, True),
        (2, 20, True, False, True),
        (2, 21, True, True, True),
        (3, 0, True, False, True),
    ],
)
def test_page_flags(page, count, has_previous, has_next, show_pagination):
    result = InvoicePage(count=count, invoices=[], page=page)

    assert result.has_previous is has_previous
    assert result.has_next is has_next
    assert result.show_pagination is show_pagination
