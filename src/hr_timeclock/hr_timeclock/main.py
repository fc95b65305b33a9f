from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import error_response
from .container import build_container
from .core.enums import StoreBackend
from .core.exceptions import DomainError
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, list_tables
from .dashboard.controller import register as register_dashboard
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .leave.controller import register as register_leave
from .timeclock.controller import register as register_timeclock

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    def setting(name: str, default: Any = None) -> Any:
        if overrides and name in overrides:
            return overrides[name]
        return getattr(settings, name, default)

    configure_logging(str(setting("LOG_LEVEL", "INFO")))

    app.secret_key = setting("SECRET_KEY")
    app.config["DEBUG"] = bool(setting("DEBUG", False))
    app.config["TESTING"] = bool(setting("TESTING", False))

    store_backend = str(setting("STORE_BACKEND", StoreBackend.MEMORY.value))
    db_config = dict(setting("DB_CONFIG", {}) or {})
    logger.info(
        "settings=%s store=%s db=%s@%s:%s/%s",
        settings_module,
        store_backend,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if store_backend == StoreBackend.MYSQL.value and bool(setting("AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        store_backend=store_backend,
        db_config=db_config,
        timezone=str(setting("TIMEZONE", "") or ""),
        hours_decimals=int(setting("HOURS_DECIMALS", 2)),
    )
    app.extensions["hr_timeclock"] = container

    register_employees(app, container)
    register_departments(app, container)
    register_timeclock(app, container)
    register_leave(app, container)
    register_dashboard(app, container)
    app.register_error_handler(DomainError, error_response)

    return app
