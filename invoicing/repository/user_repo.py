from __future__ import annotations

from sqlite3 import Connection


def list_credentials(conn: Connection):
    return conn.execute("SELECT id, password FROM users ORDER BY id").fetchall()


def update_password(conn: Connection, user_id: str, password_hash: str) -> None:
    conn.execute("UPDATE users SET password = ? WHERE id = ?", (password_hash, user_id))


def get_by_email(conn: Connection, email: str):
    return conn.execute(
        "SELECT id, name, email, password FROM users WHERE email=?", (email,)
    ).fetchone()


def insert(conn: Connection, user_id: str, name: str, email: str, password_hash: str) -> None:
    conn.execute(
        "INSERT OR IGNORE INTO users(id, name, email, password) VALUES(?,?,?,?)",
        (user_id, name, email, password_hash),
    )
