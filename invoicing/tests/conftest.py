import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

ALICE = "c0000000-0000-4000-8000-000000000001"
BOB = "c0000000-0000-4000-8000-000000000002"
CAROL = "c0000000-0000-4000-8000-000000000003"

CUSTOMERS = [
    (ALICE, "Alice Adams", "alice@example.com", "/customers/alice.png"),
    (BOB, "Bob Brown", "bob@example.com", "/customers/bob.png"),
    (CAROL, "Carol Chen", "carol@example.com", "/customers/carol.png"),
]

# (id, customer_id, amount cents, status, date)
INVOICES = [
    ("inv-1", ALICE, 15795, "pending", "2023-01-10"),
    ("inv-2", ALICE, 20348, "paid", "2023-02-11"),
    ("inv-3", BOB, 3040, "paid", "2023-03-12"),
    ("inv-4", BOB, 44800, "pending", "2023-04-13"),
    ("inv-5", ALICE, 666, "pending", "2023-05-14"),
    ("inv-6", BOB, 32545, "paid", "2023-06-15"),
    ("inv-7", ALICE, 1250, "paid", "2023-07-16"),
    ("inv-8", BOB, 8546, "pending", "2023-08-17"),
]


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "invoices_test.db"
    # Point the app at this temp DB
    os.environ["INVOICE_DB_PATH"] = str(path)
    from invoicing.db import ensure_schema
    from invoicing.logs import ensure_log_schema
    ensure_schema(str(path))
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from invoicing.services.config_svc import ensure_default_config
    ensure_default_config()
    from invoicing.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Only ever wipe the temp DB, never a real one
    assert os.environ.get("INVOICE_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["invoices", "customers", "users", "revenue", "config", "operation_log"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def sample_data(tmp_db_path):
    """Three customers (Carol has no invoices) and eight invoices, one per month."""
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.executemany("INSERT INTO customers(id, name, email, image_url) VALUES(?,?,?,?)", CUSTOMERS)
        conn.executemany("INSERT INTO invoices(id, customer_id, amount, status, date) VALUES(?,?,?,?,?)", INVOICES)
        conn.executemany(
            "INSERT INTO revenue(month, revenue) VALUES(?,?)",
            [("Mar", 3000), ("Jan", 1200), ("Feb", 4800)],
        )
        conn.commit()
    finally:
        conn.close()
    return {"customers": CUSTOMERS, "invoices": INVOICES}
