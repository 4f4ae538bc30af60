from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_response, require_role
from ..core.enums import PRIVILEGED_ROLES
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @api_errors
    def attendance_mark():
        require_role(current_actor(), *PRIVILEGED_ROLES)
        data = request.get_json(silent=True) or {}
        record = container.attendance_service.mark_attendance(
            employee_id=data.get("employee_id"),
            work_date=data.get("date"),
            status=data.get("status"),
            check_in_time=data.get("check_in_time"),
            check_out_time=data.get("check_out_time"),
            notes=data.get("notes"),
            location=data.get("location"),
        )
        return json_response(record.as_dict())

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_history")
    @api_errors
    def attendance_history(employee_id: int):
        records = container.attendance_service.list_for_employee(
            employee_id,
            start_date=request.args.get("start_date"),
            end_date=request.args.get("end_date"),
        )
        return json_response([r.as_dict() for r in records])
