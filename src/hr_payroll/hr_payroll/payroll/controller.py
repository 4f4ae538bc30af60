from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_response, require_role
from ..core.enums import PRIVILEGED_ROLES, Role
from ..container import Container


def _truthy(value) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @api_errors
    def payroll_list():
        month = request.args.get("month")
        year = request.args.get("year")
        if _truthy(request.args.get("all_employees")) and month and year:
            reconcile = _truthy(request.args.get("reconcile")) or bool(app.config.get("RECONCILE_ON_LIST"))
            return json_response(container.payroll_view.list_month(month, year, reconcile=reconcile))

        records = container.payroll_service.list_records(
            month=month,
            year=year,
            employee_id=request.args.get("employee_id"),
        )
        return json_response([r.as_dict() for r in records])

    @app.route("/api/payroll/<int:payroll_id>", methods=["GET"], endpoint="payroll_get")
    @api_errors
    def payroll_get(payroll_id: int):
        return json_response(container.payroll_service.get_record(payroll_id).as_dict())

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_create")
    @api_errors
    def payroll_create():
        require_role(current_actor(), *PRIVILEGED_ROLES)
        data = request.get_json(silent=True) or {}
        result = container.payroll_service.create_or_upsert(
            employee_id=data.get("employee_id"),
            month=data.get("month"),
            year=data.get("year"),
            basic_salary=data.get("basic_salary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            status=data.get("status"),
        )
        return json_response(result.record.as_dict(), 201 if result.created else 200)

    @app.route("/api/payroll/<int:payroll_id>", methods=["PUT"], endpoint="payroll_update")
    @api_errors
    def payroll_update(payroll_id: int):
        require_role(current_actor(), *PRIVILEGED_ROLES)
        data = request.get_json(silent=True) or {}
        record = container.payroll_service.update(
            payroll_id,
            basic_salary=data.get("basic_salary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
            status=data.get("status"),
        )
        return json_response(record.as_dict())

    @app.route("/api/payroll/process", methods=["POST"], endpoint="payroll_process")
    @api_errors
    def payroll_process():
        require_role(current_actor(), Role.ADMIN)
        data = request.get_json(silent=True) or {}
        created = container.payroll_service.process_month(month=data.get("month"), year=data.get("year"))
        return json_response(
            {
                "message": f"Payroll processed for {len(created)} employees",
                "payrolls": [r.as_dict() for r in created],
            }
        )

    @app.route("/api/payroll/reconcile", methods=["POST"], endpoint="payroll_reconcile")
    @api_errors
    def payroll_reconcile():
        require_role(current_actor(), *PRIVILEGED_ROLES)
        data = request.get_json(silent=True) or {}
        result = container.payroll_view.reconcile_month(
            data.get("month") or request.args.get("month"),
            data.get("year") or request.args.get("year"),
        )
        return json_response({"corrected": result.corrected, "payrolls": result.rows})
