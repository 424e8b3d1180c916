"""Create the schema and, optionally, load demo data.

    python scripts/init_db.py            # schema only
    python scripts/init_db.py --seed     # schema + sites/portfolios/positions/stores + demo logins
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_dashboard.workforce_dashboard.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    ensure_demo_users,
    list_tables,
)

DATABASE_DIR = REPO_ROOT / "database"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", action="store_true", help="also load seed.sql and the demo accounts")
    parser.add_argument("--settings", help="settings module, defaults to APP_ENV selection")
    args = parser.parse_args(argv)

    settings = importlib.import_module(args.settings or get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    print(f"OK: schema applied -> {target} (tables={len(list_tables(db_config))})")

    if args.seed:
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)
        print(f"OK: demo data loaded -> {target}")


if __name__ == "__main__":
    main()
