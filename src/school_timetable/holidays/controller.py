from __future__ import annotations

from flask import Flask, request

from ..common.http import api_ok, api_view, as_bool, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendars/<int:calendar_id>/holidays", methods=["GET"], endpoint="holidays_list")
    @api_view
    def holidays_list(calendar_id: int):
        return api_ok(container.holiday_register.list_for_calendar(calendar_id))

    @app.route("/api/calendars/<int:calendar_id>/holidays", methods=["POST"], endpoint="holidays_add")
    @api_view
    def holidays_add(calendar_id: int):
        payload = json_body()
        holiday = container.holiday_register.add(
            calendar_id=calendar_id,
            name=payload.get("name"),
            date=payload.get("date"),
            recurring=as_bool(payload.get("recurring")),
        )
        return api_ok(holiday, 201)

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_on")
    @api_view
    def holidays_on():
        return api_ok(container.holiday_register.holidays_on(request.args.get("date")))

    @app.route("/api/holidays/<int:holiday_id>", methods=["PUT"], endpoint="holidays_update")
    @api_view
    def holidays_update(holiday_id: int):
        payload = json_body()
        holiday = container.holiday_register.update(
            holiday_id,
            name=payload.get("name"),
            date=payload.get("date"),
            recurring=as_bool(payload.get("recurring")),
        )
        return api_ok(holiday)

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @api_view
    def holidays_delete(holiday_id: int):
        container.holiday_register.delete(holiday_id)
        return api_ok({"id": holiday_id})
