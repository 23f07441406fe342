"""
Load placeholder users, customers, invoices and revenue from CSV files.

Usage:
  python -m invoicing.scripts.seed_from_csv --dir seeds
"""
from __future__ import annotations

import argparse
import logging
import sys

from invoicing.db import ensure_schema
from invoicing.logs import LogContext, ensure_log_schema
from invoicing.services.config_svc import ensure_default_config, get_config
from invoicing.services.seed_svc import seed_load


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--dir", default="seeds", help="directory holding users/customers/invoices/revenue CSVs")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ensure_schema()
    ensure_log_schema()
    ensure_default_config()

    log = LogContext("SEED_FROM_CSV", source="cli")
    try:
        res = seed_load(args.dir, log, get_config()["bcrypt_rounds"])
    except Exception as e:
        logging.getLogger(__name__).exception("Seeding failed: %s", e)
        log.write("ERROR", str(e))
        return 1
    log.write("OK")
    print({"message": "ok", **res})
    return 0


if __name__ == "__main__":
    sys.exit(main())
