from __future__ import annotations

from sqlite3 import Connection


def list_all(conn: Connection):
    return conn.execute("SELECT month, revenue FROM revenue").fetchall()


def upsert(conn: Connection, month: str, revenue: int) -> None:
    conn.execute(
        "INSERT INTO revenue(month, revenue) VALUES(?, ?) "
        "ON CONFLICT(month) DO UPDATE SET revenue=excluded.revenue",
        (month, int(revenue)),
    )
