from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles of the acting user, as reported by the auth layer."""

    ADMIN = "admin"
    HR_EXECUTIVE = "hr_executive"
    ACCOUNTANT = "accountant"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Attendance status stored per employee per date."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    ON_LEAVE = "on_leave"


class LeaveStatus(str, Enum):
    """Approval state of a leave application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    PAID = "paid"


# Roles whose leave entries skip the approval step.
PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.HR_EXECUTIVE})
