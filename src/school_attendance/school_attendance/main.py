from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container, build_store
from .dashboards.controller import register as register_dashboards
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .store.repository import RecordStore
from .users.controller import register as register_users

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, store: Optional[RecordStore] = None) -> Flask:
    """Application factory.

    ``store`` overrides the configured Record Store backend (tests pass an in-memory one).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    log_level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(log_level)

    db_config = getattr(settings, "DB_CONFIG")
    backend = str(getattr(settings, "RECORD_STORE", "mysql")).lower()

    if store is None:
        if backend == "mysql":
            app.logger.info(
                "settings=%s store=mysql db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )
            if bool(getattr(settings, "AUTO_INIT_DB", False)):
                apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
                app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            if bool(getattr(settings, "AUTO_SEED_DB", False)):
                apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
                app.logger.info("demo seed ready")
        else:
            app.logger.info("settings=%s store=%s", settings_module, backend)
        store = build_store(backend, db_config=db_config)

    container = build_container(store=store)

    register_users(app, container)
    register_attendance(app, container)
    register_dashboards(app, container)

    return app
