"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Setting keys read through the configuration provider.
TDS_PERCENTAGE_KEY = "tds_percentage"
MAX_ALLOWED_LEAVES_KEY = "max_allowed_leaves"
WORKING_DAYS_KEY = "working_days_per_month"

DEFAULT_TDS_PERCENTAGE = 10
DEFAULT_MAX_ALLOWED_LEAVES = 2
DEFAULT_WORKING_DAYS_PER_MONTH = 30

# Defaults applied by bulk month processing, as fractions of basic salary.
DEFAULT_ALLOWANCE_RATE = Decimal("0.10")
DEFAULT_OTHER_DEDUCTION_RATE = Decimal("0.05")

# Stored vs. live figures closer than this are considered equal.
DRIFT_TOLERANCE = Decimal("0.01")

MIN_YEAR = 2000
MAX_YEAR = 2100

SALARY_LEDGER_HEAD = "Salary & Wages"
DEFAULT_LIST_LIMIT = 500

# Largest value a DECIMAL(10, 2) payroll column holds.
MAX_AMOUNT = Decimal("99999999.99")
