from __future__ import annotations

from sqlite3 import Connection


def list_fields(conn: Connection):
    return conn.execute("SELECT id, name FROM customers ORDER BY name ASC").fetchall()


def search_table(conn: Connection, query: str):
    """
    Customers matching name/email with their invoice count and pending/paid sums (cents).
    Customers without invoices still appear, with zero totals.
    """
    return conn.execute(
        """
        SELECT
          customers.id,
          customers.name,
          customers.email,
          customers.image_url,
          COUNT(invoices.id) AS total_invoices,
          COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
          COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
        FROM customers
        LEFT JOIN invoices ON customers.id = invoices.customer_id
        WHERE
          customers.name LIKE :q OR
          customers.email LIKE :q
        GROUP BY customers.id, customers.name, customers.email, customers.image_url
        ORDER BY customers.name ASC
        """,
        {"q": f"%{query}%"},
    ).fetchall()


def exists(conn: Connection, customer_id: str) -> bool:
    row = conn.execute("SELECT 1 FROM customers WHERE id=?", (customer_id,)).fetchone()
    return row is not None


def insert(conn: Connection, customer_id: str, name: str, email: str, image_url: str) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO customers(id, name, email, image_url) VALUES(?,?,?,?)",
        (customer_id, name, email, image_url),
    )
