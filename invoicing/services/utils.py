from __future__ import annotations

# invoicing/services/utils.py
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..db import get_conn
from ..errors import DataAccessError

logger = logging.getLogger(__name__)


@contextmanager
def guarded_conn(message: str) -> Iterator[sqlite3.Connection]:
    """
    get_conn() for read paths: a driver error is logged and re-raised as
    DataAccessError(message) with the original chained.
    """
    try:
        with get_conn() as conn:
            yield conn
    except sqlite3.Error as e:
        logger.exception("Database Error: %s", e)
        raise DataAccessError(message) from e
