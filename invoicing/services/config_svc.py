# invoicing/services/config_svc.py
from ..db import get_conn
from ..logs import LogContext

DEFAULTS = {
    "items_per_page": "6",
    "latest_invoices_limit": "5",
    "bcrypt_rounds": "10",
    # amount (cents) that the /query diagnostic lists
    "diagnostic_amount": "666",
}

# inclusive (min, max); None means unbounded. bcrypt only accepts cost 4..31.
RANGES = {
    "items_per_page": (1, None),
    "latest_invoices_limit": (1, None),
    "bcrypt_rounds": (4, 31),
    "diagnostic_amount": (1, None),
}

def ensure_default_config():
    """Insert missing keys without overwriting existing values."""
    with get_conn() as conn:
        for k, v in DEFAULTS.items():
            conn.execute(
                "INSERT INTO config(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO NOTHING",
                (k, v),
            )

def get_config() -> dict:
    with get_conn() as conn:
        rows = conn.execute("SELECT key, value FROM config").fetchall()
    cfg = {r["key"]: r["value"] for r in rows}

    return {
        "items_per_page": int(cfg.get("items_per_page", DEFAULTS["items_per_page"])),
        "latest_invoices_limit": int(cfg.get("latest_invoices_limit", DEFAULTS["latest_invoices_limit"])),
        "bcrypt_rounds": int(cfg.get("bcrypt_rounds", DEFAULTS["bcrypt_rounds"])),
        "diagnostic_amount": int(cfg.get("diagnostic_amount", DEFAULTS["diagnostic_amount"])),
    }

def _coerce_setting(key: str, value) -> int:
    """Whole numbers only: bools and fractional values are rejected, "7" and 7.0 are accepted."""
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{key} must be an integer")
        out = int(value)
    elif isinstance(value, int):
        out = value
    elif isinstance(value, str) and value.strip().lstrip("-").isdigit():
        out = int(value.strip())
    else:
        raise ValueError(f"{key} must be an integer")
    lo, hi = RANGES[key]
    if out < lo or (hi is not None and out > hi):
        bound = f"between {lo} and {hi}" if hi is not None else f"at least {lo}"
        raise ValueError(f"{key} must be {bound}")
    return out

def update_config(upd: dict, log: LogContext) -> list[str]:
    unknown = sorted(set(upd) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")
    values = {k: _coerce_setting(k, v) for k, v in upd.items()}
    updated = []
    with get_conn() as conn:
        before = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
        for k, v in values.items():
            conn.execute(
                "INSERT INTO config(key,value) VALUES(?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (k, str(v))
            )
            updated.append(k)
        after = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
    log.set_before(before); log.set_after(after)
    return updated
