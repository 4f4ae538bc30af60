from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.background import TaskQueue
from .common.locks import KeyedLock
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .ledger.mysql_ledger_repository import MySQLLedgerRepository
from .ledger.service import LedgerSyncService
from .payroll.calculator.standard_calculator import StandardDeductionCalculator
from .payroll.leave_counter import LeaveDayCounter
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.recalculation import PayrollRecalculator, RecalculationQueue
from .payroll.service import PayrollService
from .payroll.view import PayrollView
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.provider import SettingsConfigProvider
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    payroll_repo: MySQLPayrollRepository
    settings_repo: MySQLSettingsRepository
    ledger_repo: MySQLLedgerRepository

    settings_service: SettingsService
    ledger_sync_service: LedgerSyncService
    payroll_service: PayrollService
    payroll_view: PayrollView
    recalculator: PayrollRecalculator
    recalc_queue: RecalculationQueue
    attendance_service: AttendanceService
    leave_service: LeaveService


def build_container(*, db_config: dict, recalc_workers: int = 2) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)
    ledger_repo = MySQLLedgerRepository(conn)

    settings_service = SettingsService(settings_repo)
    ledger_sync_service = LedgerSyncService(ledger_repo)

    calculator = StandardDeductionCalculator(
        LeaveDayCounter(attendance_repo, leaves_repo),
        SettingsConfigProvider(settings_repo),
    )
    payroll_service = PayrollService(
        payroll_repo,
        employees_repo,
        calculator,
        locks=KeyedLock(),
        ledger_sync=ledger_sync_service,
    )
    payroll_view = PayrollView(payroll_repo, employees_repo, payroll_service)

    recalculator = PayrollRecalculator(payroll_service)
    recalc_queue = RecalculationQueue(recalculator, TaskQueue(workers=recalc_workers, name="payroll-recalc"))

    attendance_service = AttendanceService(attendance_repo, employees_repo, recalc_queue=recalc_queue)
    leave_service = LeaveService(leaves_repo, employees_repo, recalculator, recalc_queue)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        settings_repo=settings_repo,
        ledger_repo=ledger_repo,
        settings_service=settings_service,
        ledger_sync_service=ledger_sync_service,
        payroll_service=payroll_service,
        payroll_view=payroll_view,
        recalculator=recalculator,
        recalc_queue=recalc_queue,
        attendance_service=attendance_service,
        leave_service=leave_service,
    )
