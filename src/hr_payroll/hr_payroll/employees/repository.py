from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read-only view of the employee directory.

    Employee CRUD lives elsewhere; payroll only needs salary and status.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        """All employees ordered by first name, last name."""

        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError
