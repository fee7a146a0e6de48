"""Database chores: ``python scripts/manage_db.py {init,seed,tables}``.

``init`` creates the database and applies database/schema.sql, ``seed`` loads
the demo employees from database/seed.sql, ``tables`` lists what exists.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.hr_attendance.hr_attendance.database.bootstrap import apply_schema, apply_seed_sql, list_tables

SQL_DIR = REPO_ROOT / "database"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=["init", "seed", "tables"])
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    db_config = dict(importlib.import_module(get_settings_module()).DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    if args.command == "init":
        apply_schema(db_config, schema_path=SQL_DIR / "schema.sql")
    elif args.command == "seed":
        apply_seed_sql(db_config, seed_path=SQL_DIR / "seed.sql")

    tables = list_tables(db_config)
    print(f"{target}: {', '.join(tables) or 'no tables'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
