from __future__ import annotations

# invoicing/services/seed_svc.py
import os

import pandas as pd

from ..db import get_conn, transaction
from ..logs import LogContext
from ..repository import customer_repo, invoice_repo, revenue_repo, user_repo
from .user_svc import hash_password, is_bcrypt_hash


def seed_load(seed_dir: str, log: LogContext, rounds: int = 10) -> dict:
    """Load placeholder data from CSV files in seed_dir. Each file is optional:
       users.csv: id, name, email, password (plaintext is bcrypt-hashed on the way in)
       customers.csv: id, name, email, image_url
       invoices.csv: id, customer_id, amount (cents), status, date (YYYY-MM-DD)
       revenue.csv: month, revenue
    Existing ids are kept; revenue months are overwritten.
    All four files load in one transaction: a bad row leaves the DB untouched.
    """
    counts = {"users": 0, "customers": 0, "invoices": 0, "revenue": 0}

    def _read(name: str) -> pd.DataFrame | None:
        path = os.path.join(seed_dir, name)
        if not os.path.exists(path):
            return None
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    users = _read("users.csv")
    customers = _read("customers.csv")
    invoices = _read("invoices.csv")
    revenue = _read("revenue.csv")

    with get_conn() as conn, transaction(conn):
        if users is not None:
            for _, r in users.iterrows():
                pw = str(r["password"])
                if not is_bcrypt_hash(pw):
                    pw = hash_password(pw, rounds)
                user_repo.insert(conn, str(r["id"]).strip(), str(r["name"]).strip(), str(r["email"]).strip(), pw)
                counts["users"] += 1

        if customers is not None:
            for _, r in customers.iterrows():
                customer_repo.insert(
                    conn, str(r["id"]).strip(), str(r["name"]).strip(),
                    str(r["email"]).strip(), str(r["image_url"]).strip(),
                )
                counts["customers"] += 1

        if invoices is not None:
            for _, r in invoices.iterrows():
                invoice_id = str(r["id"]).strip()
                if invoice_repo.get_form(conn, invoice_id) is not None:
                    continue
                invoice_repo.insert(
                    conn, invoice_id, str(r["customer_id"]).strip(), int(r["amount"]),
                    str(r["status"]).strip().lower(), str(r["date"]).strip(),
                )
                counts["invoices"] += 1

        if revenue is not None:
            for _, r in revenue.iterrows():
                revenue_repo.upsert(conn, str(r["month"]).strip(), int(r["revenue"]))
                counts["revenue"] += 1

    log.set_payload({"seed_dir": seed_dir})
    log.set_after(counts)
    return counts
