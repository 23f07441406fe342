from __future__ import annotations

# invoicing/services/user_svc.py
import logging

import bcrypt

from ..db import get_conn
from ..logs import LogContext
from ..repository import user_repo

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def is_bcrypt_hash(value: str | None) -> bool:
    return bool(value) and value.startswith(BCRYPT_PREFIXES) and len(value) == 60


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def rehash_passwords(log: LogContext, rounds: int = 10) -> dict:
    """
    Replace every plaintext password in `users` with its bcrypt hash.

    Rows already holding a bcrypt hash are left alone, so running the
    maintenance twice never hashes a hash.
    """
    updated, skipped = [], []
    with get_conn() as conn:
        users = user_repo.list_credentials(conn)
        for user in users:
            user_id, password = user["id"], user["password"]
            if is_bcrypt_hash(password):
                skipped.append(user_id)
                continue
            user_repo.update_password(conn, user_id, hash_password(password, rounds))
            updated.append(user_id)
            logger.info("Password for user with ID %s updated.", user_id)
    logger.info("All user passwords have been updated (%d updated, %d skipped).", len(updated), len(skipped))
    res = {"updated": len(updated), "skipped": len(skipped)}
    log.set_payload({"rounds": rounds})
    log.set_after({**res, "user_ids": updated})
    return res


def verify_user(email: str, password: str) -> dict | None:
    """Return {id, name, email} when the password matches the stored hash, else None."""
    with get_conn() as conn:
        row = user_repo.get_by_email(conn, email)
    if row is None or not is_bcrypt_hash(row["password"]):
        return None
    if not bcrypt.checkpw(password.encode("utf-8"), row["password"].encode("utf-8")):
        return None
    return {"id": row["id"], "name": row["name"], "email": row["email"]}
