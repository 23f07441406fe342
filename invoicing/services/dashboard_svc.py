from __future__ import annotations

# invoicing/services/dashboard_svc.py
import pandas as pd

from ..domain.money import format_currency, generate_y_axis
from ..repository import revenue_repo, invoice_repo
from .config_svc import get_config
from .utils import guarded_conn

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def fetch_revenue() -> list[dict]:
    with guarded_conn("Failed to fetch revenue data.") as conn:
        rows = revenue_repo.list_all(conn)
    return [dict(r) for r in rows]


def fetch_latest_invoices() -> list[dict]:
    """Most recent invoices with the customer attached; amount is a display string."""
    with guarded_conn("Failed to fetch the latest invoices.") as conn:
        limit = get_config()["latest_invoices_limit"]
        rows = invoice_repo.latest(conn, limit)
    out = []
    for r in rows:
        it = dict(r)
        it["amount"] = format_currency(it["amount"])
        out.append(it)
    return out


def fetch_card_data() -> dict:
    with guarded_conn("Failed to fetch dashboard data.") as conn:
        row = invoice_repo.card_totals(conn)
    return {
        "total_paid_invoices": format_currency(row["total_paid"]),
        "total_pending_invoices": format_currency(row["total_pending"]),
        "number_of_invoices": int(row["invoice_count"]),
        "number_of_customers": int(row["customer_count"]),
    }


def revenue_chart() -> dict:
    """
    Revenue bars in calendar order plus the y-axis scale.
    Months outside Jan..Dec sort last, in storage order.
    """
    items = fetch_revenue()
    if not items:
        return {"items": [], "y_axis": [], "top_label": 0, "total": 0, "best_month": None}

    df = pd.DataFrame(items)
    df["month"] = df["month"].astype(str)
    df["_order"] = df["month"].map({m: i for i, m in enumerate(MONTHS)}).fillna(len(MONTHS))
    df = df.sort_values("_order", kind="stable").drop(columns="_order")
    df["revenue"] = df["revenue"].astype(int)

    y_axis, top_label = generate_y_axis(items)
    best = df.loc[df["revenue"].idxmax()]
    return {
        "items": [{"month": str(m), "revenue": int(v)} for m, v in zip(df["month"], df["revenue"])],
        "y_axis": y_axis,
        "top_label": top_label,
        "total": int(df["revenue"].sum()),
        "best_month": str(best["month"]),
    }
