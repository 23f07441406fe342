from __future__ import annotations

# invoicing/services/customer_svc.py
from ..repository import customer_repo
from .utils import guarded_conn


def fetch_customers() -> list[dict]:
    """All customers as {id, name} for select boxes, ordered by name."""
    with guarded_conn("Failed to fetch all customers.") as conn:
        rows = customer_repo.list_fields(conn)
    return [{"id": str(r["id"]), "name": str(r["name"])} for r in rows]


def fetch_filtered_customers(query: str = "") -> list[dict]:
    with guarded_conn("Failed to fetch customer table.") as conn:
        rows = customer_repo.search_table(conn, query or "")
    return [
        {
            "id": str(r["id"]),
            "name": str(r["name"]),
            "email": str(r["email"]),
            "image_url": str(r["image_url"]),
            "total_invoices": int(r["total_invoices"] or 0),
            # raw cents; the table formats them
            "total_pending": int(r["total_pending"] or 0),
            "total_paid": int(r["total_paid"] or 0),
        }
        for r in rows
    ]
