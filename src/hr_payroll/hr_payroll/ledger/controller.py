from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_response, require_role
from ..core.enums import PRIVILEGED_ROLES, Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/accounting/sync-salary", methods=["POST"], endpoint="ledger_sync_salary")
    @api_errors
    def ledger_sync_salary():
        require_role(current_actor(), *PRIVILEGED_ROLES, Role.ACCOUNTANT)
        entry = container.ledger_sync_service.sync_salary(request.args.get("month"), request.args.get("year"))
        return json_response(
            {
                "message": "Salary amount synced successfully",
                "totalPaidSalaries": entry.amount,
                "entryId": entry.entry_id,
                "month": entry.month,
                "year": entry.year,
            }
        )
