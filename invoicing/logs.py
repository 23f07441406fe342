"""
Audit trail for mutating operations (invoice edits, settings, seeding, rehash).

One `operation_log` row per operation: what was touched, the request payload,
the before/after snapshots and whether it succeeded.
"""
from __future__ import annotations

import json
import time
import datetime as dt
from typing import Any, Optional

from .db import get_conn

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  source TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  before_json TEXT,
  after_json TEXT,
  payload_json TEXT,
  result TEXT NOT NULL,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_ts ON operation_log(ts);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
CREATE INDEX IF NOT EXISTS idx_log_entity ON operation_log(entity_type, entity_id);
"""

_JSON_COLUMNS = ("before_json", "after_json", "payload_json")


def ensure_log_schema():
    with get_conn() as conn:
        conn.executescript(DDL)


def _dump(obj: Any) -> Optional[str]:
    if obj is None:
        return None
    return json.dumps(obj, ensure_ascii=False, default=str)


class LogContext:
    """Collects one operation's audit data; `write()` persists it.

    `source` tells HTTP requests ("api") apart from maintenance scripts ("cli").
    """

    def __init__(self, action: str, source: str = "api"):
        self.action = action
        self.source = source
        self.start = time.perf_counter()
        self.before = None
        self.after = None
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid: str):
        self.entity_type = etype
        self.entity_id = eid

    def set_before(self, obj): self.before = obj
    def set_after(self, obj): self.after = obj
    def set_payload(self, obj): self.payload = obj

    def write(self, result: str = "OK", err: Optional[str] = None):
        with get_conn() as conn:
            conn.execute(
                "INSERT INTO operation_log"
                "(ts, source, action, entity_type, entity_id, before_json, after_json, payload_json, result, err_msg, latency_ms) "
                "VALUES(?,?,?,?,?,?,?,?,?,?,?)",
                (
                    dt.datetime.now(dt.timezone.utc).isoformat(),
                    self.source,
                    self.action,
                    self.entity_type,
                    self.entity_id,
                    _dump(self.before),
                    _dump(self.after),
                    _dump(self.payload),
                    result,
                    err,
                    int((time.perf_counter() - self.start) * 1000),
                ),
            )


def search_logs(
    q: str | None = None,
    action: str | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
    page: int = 1,
    size: int = 20,
    entity_type: str | None = None,
    entity_id: str | None = None,
) -> tuple[int, list[dict]]:
    """Newest-first page of audit rows; every filter is optional and they combine with AND."""
    q_like = f"%{q}%" if q else None
    filters = {
        "(payload_json LIKE :q OR before_json LIKE :q OR after_json LIKE :q)": q_like,
        "action = :action": action,
        "ts >= :ts_from": ts_from,
        "ts <= :ts_to": ts_to,
        "entity_type = :entity_type": entity_type,
        "entity_id = :entity_id": entity_id,
    }
    where = [clause for clause, value in filters.items() if value]
    params = {
        "q": q_like,
        "action": action,
        "ts_from": ts_from,
        "ts_to": ts_to,
        "entity_type": entity_type,
        "entity_id": entity_id,
    }
    wh = " WHERE " + " AND ".join(where) if where else ""
    offset = (max(int(page), 1) - 1) * size
    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{wh}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT * FROM operation_log{wh} ORDER BY ts DESC, id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": offset},
        ).fetchall()
    return total, [dict(r) for r in rows]


def entity_history(entity_type: str, entity_id: str) -> list[dict]:
    """
    Successful operations on one entity, oldest first, with the JSON
    snapshots decoded (`before`, `after`, `payload`).
    """
    with get_conn() as conn:
        rows = conn.execute(
            "SELECT ts, source, action, before_json, after_json, payload_json FROM operation_log "
            "WHERE entity_type = ? AND entity_id = ? AND result = 'OK' ORDER BY id ASC",
            (entity_type, entity_id),
        ).fetchall()
    out = []
    for r in rows:
        item = {"ts": r["ts"], "source": r["source"], "action": r["action"]}
        for col in _JSON_COLUMNS:
            item[col[: -len("_json")]] = json.loads(r[col]) if r[col] else None
        out.append(item)
    return out
