from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_LOW_STOCK_THRESHOLD
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .logistics.controller import register as register_logistics
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .workers.controller import register as register_workers

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """App factory; pass ``container`` to run against prebuilt (e.g. in-memory) services."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CURRENCY_SYMBOL"] = getattr(settings, "CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL)
    low_stock_threshold = int(getattr(settings, "LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            app.logger.info("demo seed ready")

        container = build_container(db_config=db_config, low_stock_threshold=low_stock_threshold)

    register_users(app, container)
    register_workers(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_logistics(app, container)

    return app
