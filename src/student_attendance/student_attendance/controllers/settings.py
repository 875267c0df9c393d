from __future__ import annotations

from flask import Flask, request

from ..container import Container
from ..core.exceptions import InvalidInputError
from .responses import json_errors, ok


def register(app: Flask, container: Container) -> None:
    settings = container.settings_service

    @app.route("/api/settings", methods=["GET"], endpoint="settings_list")
    @json_errors("Failed to fetch settings")
    def settings_list():
        return ok(settings.get_all())

    @app.route("/api/settings", methods=["POST"], endpoint="settings_update")
    @json_errors("Failed to update setting")
    def settings_update():
        data = request.get_json(silent=True) or {}
        if not data.get("key") or data.get("value") is None:
            raise InvalidInputError("Key and value are required")

        setting = settings.update_setting(data["key"], data["value"], data.get("description"))
        return ok({"key": setting.key, "value": setting.value, "description": setting.description})

    @app.route("/api/settings/daily-fee", methods=["GET"], endpoint="settings_daily_fee")
    @json_errors("Failed to fetch settings")
    def settings_daily_fee():
        return ok({"dailyFee": settings.get_daily_fee(), "defaultDailyFee": settings.default_daily_fee})

    @app.route("/api/settings/daily-fee", methods=["PUT"], endpoint="settings_daily_fee_update")
    @json_errors("Failed to update setting")
    def settings_daily_fee_update():
        data = request.get_json(silent=True) or {}
        fee = settings.update_daily_fee(data.get("dailyFee"))
        return ok({"dailyFee": fee})

    @app.route("/api/settings/daily-fee/reset", methods=["POST"], endpoint="settings_daily_fee_reset")
    @json_errors("Failed to update setting")
    def settings_daily_fee_reset():
        return ok({"dailyFee": settings.reset_daily_fee()})
