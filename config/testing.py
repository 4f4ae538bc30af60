import os

from .config import build_logging_config

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_payroll_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

LOG_LEVEL = "WARNING"
LOG_FILE = None
LOGGING_CONFIG = build_logging_config(LOG_LEVEL, LOG_FILE)

# Recalculation runs inline so assertions can follow the triggering call.
RECALC_WORKERS = 0
RECONCILE_ON_LIST = False
