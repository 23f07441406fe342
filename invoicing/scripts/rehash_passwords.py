"""
Hash every plaintext password in the `users` table with bcrypt.

Already-hashed rows are skipped, so the script can be re-run safely.

Usage:
  python -m invoicing.scripts.rehash_passwords [--rounds 10]
"""
from __future__ import annotations

import argparse
import logging
import sys

from invoicing.db import ensure_schema
from invoicing.logs import LogContext, ensure_log_schema
from invoicing.services.config_svc import get_config
from invoicing.services.user_svc import rehash_passwords


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--rounds", type=int, default=None, help="bcrypt cost (defaults to the bcrypt_rounds setting)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ensure_schema()
    ensure_log_schema()

    log = LogContext("REHASH_PASSWORDS", source="cli")
    try:
        rounds = args.rounds if args.rounds is not None else get_config()["bcrypt_rounds"]
        res = rehash_passwords(log, rounds)
    except Exception as e:
        logging.getLogger(__name__).exception("Error rehashing passwords: %s", e)
        log.write("ERROR", str(e))
        return 1
    log.write("OK")
    print({"message": "ok", **res})
    return 0


if __name__ == "__main__":
    sys.exit(main())
