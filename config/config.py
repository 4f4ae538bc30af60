import os
from typing import Optional


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "hr-payroll-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_payroll")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
    AUTO_SEED_DB = _flag("AUTO_SEED_DB", "0")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.environ.get("LOG_FILE") or None

    # Background recalculation threads; 0 runs recalculation inline.
    RECALC_WORKERS = int(os.environ.get("RECALC_WORKERS", "2"))
    RECONCILE_ON_LIST = _flag("RECONCILE_ON_LIST", "0")


def build_logging_config(level: str = "INFO", log_file: Optional[str] = None) -> dict:
    """dictConfig payload: console always, rotating file when ``log_file`` is set."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "standard",
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": 5,
            "level": level,
            "encoding": "utf-8",
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s",
            },
        },
        "handlers": handlers,
        "root": {
            "handlers": list(handlers),
            "level": level,
        },
    }


SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

DEBUG = _flag("DEBUG", "0")

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
LOG_LEVEL = Config.LOG_LEVEL
LOG_FILE = Config.LOG_FILE
RECALC_WORKERS = Config.RECALC_WORKERS
RECONCILE_ON_LIST = Config.RECONCILE_ON_LIST
LOGGING_CONFIG = build_logging_config(LOG_LEVEL, LOG_FILE)
