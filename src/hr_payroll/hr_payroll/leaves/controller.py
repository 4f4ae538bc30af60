from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="leave_apply")
    @api_errors
    def leave_apply():
        actor = current_actor()
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.apply_leave(
            current_role=actor.role,
            current_user_id=actor.user_id,
            employee_id=data.get("employee_id"),
            leave_type=data.get("leave_type"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            reason=data.get("reason"),
        )
        return json_response(leave.as_dict(), 201)

    @app.route("/api/leaves", methods=["GET"], endpoint="leave_list")
    @api_errors
    def leave_list():
        leaves = container.leave_service.list_leaves(
            status=request.args.get("status"),
            employee_id=request.args.get("employee_id"),
            upcoming=(request.args.get("upcoming") or "").lower() == "true",
        )
        return json_response([leave.as_dict() for leave in leaves])

    @app.route("/api/leaves/<int:leave_id>", methods=["GET"], endpoint="leave_get")
    @api_errors
    def leave_get(leave_id: int):
        return json_response(container.leave_service.get_leave(leave_id).as_dict())

    @app.route("/api/leaves/<int:leave_id>/approve", methods=["PUT"], endpoint="leave_approve")
    @api_errors
    def leave_approve(leave_id: int):
        actor = current_actor()
        leave = container.leave_service.approve_leave(
            current_role=actor.role, current_user_id=actor.user_id, leave_id=leave_id
        )
        return json_response(leave.as_dict())

    @app.route("/api/leaves/<int:leave_id>/reject", methods=["PUT"], endpoint="leave_reject")
    @api_errors
    def leave_reject(leave_id: int):
        actor = current_actor()
        data = request.get_json(silent=True) or {}
        leave = container.leave_service.reject_leave(
            current_role=actor.role,
            current_user_id=actor.user_id,
            leave_id=leave_id,
            rejection_reason=data.get("rejection_reason"),
        )
        return json_response(leave.as_dict())
