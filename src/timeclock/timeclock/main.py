from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.logging_config import configure_logging, get_logger
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .container import build_container
from .departments.controller import register as register_departments
from .schedules.controller import register as register_schedules
from .time_entries.controller import register as register_time_entries

ROOT_DIR = Path(__file__).resolve().parents[3]


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["HISTORY_LIMIT"] = int(getattr(settings, "HISTORY_LIMIT", 20))

    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    log = get_logger("app")
    log.info(
        "starting",
        extra={
            "settings": settings_module,
            "db": f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}",
        },
    )

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=ROOT_DIR / "database" / "schema.sql")
        log.info("schema ready", extra={"tables": len(list_tables(db_config))})
    if getattr(settings, "AUTO_SEED_DB", False):
        apply_seed_sql(db_config, seed_path=ROOT_DIR / "database" / "seed.sql")
        log.info("demo seed ready")

    container = build_container(db_config=db_config)

    register_departments(app, container)
    register_time_entries(app, container)
    register_schedules(app, container)

    return app
