from __future__ import annotations

import importlib
import logging
import logging.config
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_default_settings, list_tables

from .container import build_container
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .ledger.controller import register as register_ledger
from .payroll.controller import register as register_payroll
from .settings.controller import register as register_settings

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def configure_logging(settings) -> None:
    logging_config = getattr(settings, "LOGGING_CONFIG", None)
    if not logging_config:
        return
    log_file = logging_config.get("handlers", {}).get("file", {}).get("filename")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(logging_config)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["RECONCILE_ON_LIST"] = bool(getattr(settings, "RECONCILE_ON_LIST", False))

    logger.info(
        "Starting hr-payroll settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=_PROJECT_ROOT / "database" / "schema.sql")
        ensure_default_settings(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_PROJECT_ROOT / "database" / "seed.sql")

    container = build_container(
        db_config=db_config,
        recalc_workers=int(getattr(settings, "RECALC_WORKERS", 2)),
    )

    register_payroll(app, container)
    register_leaves(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_ledger(app, container)

    return app
