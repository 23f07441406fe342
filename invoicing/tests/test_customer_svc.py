from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest

from invoicing.errors import DataAccessError
from invoicing.services.customer_svc import fetch_customers, fetch_filtered_customers

from .conftest import ALICE, BOB, CAROL


def test_fetch_customers_ordered_by_name(sample_data):
    assert fetch_customers() == [
        {"id": ALICE, "name": "Alice Adams"},
        {"id": BOB, "name": "Bob Brown"},
        {"id": CAROL, "name": "Carol Chen"},
    ]


def test_fetch_filtered_customers_totals(sample_data):
    rows = fetch_filtered_customers("")
    assert [r["name"] for r in rows] == ["Alice Adams", "Bob Brown", "Carol Chen"]
    alice, bob, carol = rows
    assert (alice["total_invoices"], alice["total_pending"], alice["total_paid"]) == (4, 16461, 21598)
    assert (bob["total_invoices"], bob["total_pending"], bob["total_paid"]) == (4, 53346, 35585)
    # customer without invoices still listed with zero totals
    assert (carol["total_invoices"], carol["total_pending"], carol["total_paid"]) == (0, 0, 0)


def test_fetch_filtered_customers_query(sample_data):
    assert [r["id"] for r in fetch_filtered_customers("carol@")] == [CAROL]
    assert [r["id"] for r in fetch_filtered_customers("Brown")] == [BOB]
    assert fetch_filtered_customers("zzz") == []


def test_customer_errors_are_wrapped():
    with patch("invoicing.services.utils.get_conn", side_effect=sqlite3.OperationalError("locked")):
        with pytest.raises(DataAccessError, match="Failed to fetch all customers."):
            fetch_customers()
        with pytest.raises(DataAccessError, match="Failed to fetch customer table."):
            fetch_filtered_customers("a")
