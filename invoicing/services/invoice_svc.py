from __future__ import annotations

# invoicing/services/invoice_svc.py
import logging
import sqlite3
import uuid
from datetime import date as dt_date

from ..db import get_conn
from ..errors import DataAccessError, NotFoundError, ValidationError
from ..logs import LogContext
from ..domain.money import cents_to_dollars, dollars_to_cents, format_date_to_local, page_offset, total_pages
from ..repository import invoice_repo, customer_repo
from .config_svc import get_config
from .utils import guarded_conn

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
STATUSES = ("pending", "paid")


def _items_per_page() -> int:
    return get_config().get("items_per_page") or ITEMS_PER_PAGE


def fetch_filtered_invoices(query: str = "", current_page: int = 1) -> list[dict]:
    """
    One page of the invoices table, newest first.
    `query` is matched as a substring against customer name/email and invoice amount/date/status.
    Amounts stay in cents; `date_local` is the display form of `date`.
    """
    with guarded_conn("Failed to fetch invoices.") as conn:
        size = _items_per_page()
        rows = invoice_repo.search_page(conn, query or "", size, page_offset(current_page, size))
    items = []
    for r in rows:
        it = dict(r)
        it["date_local"] = format_date_to_local(it["date"])
        items.append(it)
    return items


def fetch_invoices_pages(query: str = "") -> int:
    with guarded_conn("Failed to fetch total number of invoices.") as conn:
        size = _items_per_page()
        count = invoice_repo.search_count(conn, query or "")
    return total_pages(count, size)


def fetch_invoice_by_id(invoice_id: str) -> dict | None:
    """Invoice for the edit form, amount in dollars. None when the id is unknown."""
    with guarded_conn("Failed to fetch invoice.") as conn:
        row = invoice_repo.get_form(conn, invoice_id)
    if row is None:
        return None
    return {
        "id": str(row["id"]),
        "customer_id": str(row["customer_id"]),
        "amount": cents_to_dollars(row["amount"]),
        "status": str(row["status"]),
    }


def list_invoices_by_amount(amount_cents: int | None = None) -> list[dict]:
    """Invoices of one exact amount (cents) with the customer name; defaults to the configured diagnostic amount."""
    try:
        if amount_cents is None:
            amount_cents = get_config()["diagnostic_amount"]
        with get_conn() as conn:
            rows = invoice_repo.list_by_amount(conn, amount_cents)
    except sqlite3.Error as e:
        logger.exception("Database query error: %s", e)
        raise DataAccessError(str(e)) from e
    return [dict(r) for r in rows]


def _validate(conn, data: dict) -> tuple[str, int, str]:
    fields = {}
    customer_id = (data.get("customer_id") or "").strip()
    if not customer_id:
        fields["customer_id"] = "Please select a customer."
    elif not customer_repo.exists(conn, customer_id):
        fields["customer_id"] = "Unknown customer."

    amount_cents = 0
    try:
        amount_cents = dollars_to_cents(data.get("amount"))
    except (ArithmeticError, TypeError, ValueError):
        fields["amount"] = "Please enter an amount."
    else:
        if amount_cents <= 0:
            fields["amount"] = "Please enter an amount greater than $0."

    status = (data.get("status") or "").lower()
    if status not in STATUSES:
        fields["status"] = "Please select an invoice status."

    if fields:
        raise ValidationError("Missing Fields. Failed to save invoice.", fields)
    return customer_id, amount_cents, status


def create_invoice(data: dict, log: LogContext) -> dict:
    """Insert a new invoice dated today; amount arrives in dollars and is stored in cents."""
    with get_conn() as conn:
        customer_id, amount_cents, status = _validate(conn, data)
        invoice_id = str(uuid.uuid4())
        date = dt_date.today().isoformat()
        invoice_repo.insert(conn, invoice_id, customer_id, amount_cents, status, date)
    created = {"id": invoice_id, "customer_id": customer_id, "amount": amount_cents, "status": status, "date": date}
    log.set_entity("invoice", invoice_id)
    log.set_after(created)
    return created


def update_invoice(invoice_id: str, data: dict, log: LogContext) -> dict:
    log.set_entity("invoice", invoice_id)
    with get_conn() as conn:
        before = invoice_repo.get_form(conn, invoice_id)
        if before is None:
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        customer_id, amount_cents, status = _validate(conn, data)
        invoice_repo.update(conn, invoice_id, customer_id, amount_cents, status)
        after = invoice_repo.get_form(conn, invoice_id)
    log.set_before(dict(before))
    log.set_after(dict(after))
    return dict(after)


def delete_invoice(invoice_id: str, log: LogContext) -> None:
    log.set_entity("invoice", invoice_id)
    with get_conn() as conn:
        before = invoice_repo.get_form(conn, invoice_id)
        if before is None:
            raise NotFoundError(f"Invoice {invoice_id} not found.")
        invoice_repo.delete(conn, invoice_id)
    log.set_before(dict(before))
