from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_response, require_role
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_list")
    @api_errors
    def settings_list():
        return json_response([s.as_dict() for s in container.settings_service.list_settings()])

    @app.route("/api/settings/<key>", methods=["GET"], endpoint="settings_get")
    @api_errors
    def settings_get(key: str):
        return json_response(container.settings_service.get_setting(key).as_dict())

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_bulk_update")
    @api_errors
    def settings_bulk_update():
        require_role(current_actor(), Role.ADMIN)
        data = request.get_json(silent=True) or {}
        updated = container.settings_service.update_settings(data.get("settings"))
        return json_response(
            {"message": "Settings updated successfully", "settings": [s.as_dict() for s in updated]}
        )

    @app.route("/api/settings/<key>", methods=["PUT"], endpoint="settings_update")
    @api_errors
    def settings_update(key: str):
        require_role(current_actor(), Role.ADMIN)
        data = request.get_json(silent=True) or {}
        setting, created = container.settings_service.update_setting(key=key, value=data.get("value"))
        return json_response(setting.as_dict(), 201 if created else 200)
