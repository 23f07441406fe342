from __future__ import annotations

from sqlite3 import Connection

# Free-text search over the invoices table; every column gets the same %query% pattern.
_SEARCH_WHERE = """
    customers.name LIKE :q OR
    customers.email LIKE :q OR
    invoices.amount LIKE :q OR
    invoices.date LIKE :q OR
    invoices.status LIKE :q
"""


def latest(conn: Connection, limit: int = 5):
    return conn.execute(
        """
        SELECT invoices.amount, customers.name, customers.image_url,
               customers.email, invoices.id
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        ORDER BY invoices.date DESC
        LIMIT ?
        """,
        (limit,),
    ).fetchall()


def card_totals(conn: Connection):
    """
    One row: total_paid, total_pending (cents), invoice_count, customer_count.
    """
    return conn.execute(
        """
        SELECT
          (SELECT COALESCE(SUM(amount), 0) FROM invoices WHERE status = 'paid') AS total_paid,
          (SELECT COALESCE(SUM(amount), 0) FROM invoices WHERE status = 'pending') AS total_pending,
          (SELECT COUNT(*) FROM invoices) AS invoice_count,
          (SELECT COUNT(*) FROM customers) AS customer_count
        """
    ).fetchone()


def search_page(conn: Connection, query: str, limit: int, offset: int):
    return conn.execute(
        f"""
        SELECT
          invoices.id,
          invoices.amount,
          invoices.date,
          invoices.status,
          customers.name,
          customers.email,
          customers.image_url
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE {_SEARCH_WHERE}
        ORDER BY invoices.date DESC
        LIMIT :limit OFFSET :offset
        """,
        {"q": f"%{query}%", "limit": limit, "offset": offset},
    ).fetchall()


def search_count(conn: Connection, query: str) -> int:
    row = conn.execute(
        f"""
        SELECT COUNT(*) AS count
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE {_SEARCH_WHERE}
        """,
        {"q": f"%{query}%"},
    ).fetchone()
    return int(row["count"])


def get_form(conn: Connection, invoice_id: str):
    return conn.execute(
        "SELECT id, customer_id, amount, status, date FROM invoices WHERE id=?",
        (invoice_id,),
    ).fetchone()


def insert(conn: Connection, invoice_id: str, customer_id: str, amount_cents: int, status: str, date: str) -> None:
    conn.execute(
        "INSERT INTO invoices(id, customer_id, amount, status, date) VALUES(?,?,?,?,?)",
        (invoice_id, customer_id, int(amount_cents), status, date),
    )


def update(conn: Connection, invoice_id: str, customer_id: str, amount_cents: int, status: str) -> int:
    cur = conn.execute(
        "UPDATE invoices SET customer_id=?, amount=?, status=? WHERE id=?",
        (customer_id, int(amount_cents), status, invoice_id),
    )
    return cur.rowcount


def delete(conn: Connection, invoice_id: str) -> int:
    cur = conn.execute("DELETE FROM invoices WHERE id=?", (invoice_id,))
    return cur.rowcount


def list_by_amount(conn: Connection, amount_cents: int):
    return conn.execute(
        """
        SELECT invoices.amount, customers.name
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        WHERE invoices.amount = ?
        """,
        (int(amount_cents),),
    ).fetchall()
