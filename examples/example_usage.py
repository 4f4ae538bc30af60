"""Example: drive the payroll services directly, without Flask.

Recalculation runs inline (recalc_workers=0) so the printed figures already
reflect the leave approval.
"""

import importlib
import sys

from config import get_settings_module

from src.hr_payroll.hr_payroll.container import build_container
from src.hr_payroll.hr_payroll.core.enums import Role


def main(month: int = 1, year: int = 2025) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, recalc_workers=0)

    container.payroll_service.process_month(month=month, year=year)
    container.leave_service.apply_leave(
        current_role=Role.HR_EXECUTIVE,
        current_user_id=None,
        employee_id=1,
        leave_type="casual",
        start_date=f"{year}-{month:02d}-06",
        end_date=f"{year}-{month:02d}-10",
    )
    for row in container.payroll_view.list_month(month, year):
        sys.stdout.write(f"{row['first_name']} {row['last_name']}: net={row['net_salary']} leave={row['leave_deduction']}\n")


if __name__ == "__main__":
    main()
