from __future__ import annotations

from flask import Flask

from ..common.http import api_ok, api_view, as_bool, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendars", methods=["GET"], endpoint="calendars_list")
    @api_view
    def calendars_list():
        return api_ok(container.calendar_store.list_calendars())

    @app.route("/api/calendars", methods=["POST"], endpoint="calendars_create")
    @api_view
    def calendars_create():
        payload = json_body()
        calendar = container.calendar_store.create(
            name=payload.get("name"),
            start_date=payload.get("start_date"),
            end_date=payload.get("end_date"),
            description=payload.get("description"),
            is_active=as_bool(payload.get("is_active")),
        )
        return api_ok(calendar, 201)

    @app.route("/api/calendars/active", methods=["GET"], endpoint="calendars_active")
    @api_view
    def calendars_active():
        return api_ok(container.calendar_store.get_active())

    @app.route("/api/calendars/<int:calendar_id>", methods=["GET"], endpoint="calendars_get")
    @api_view
    def calendars_get(calendar_id: int):
        return api_ok(container.calendar_store.get(calendar_id))

    @app.route("/api/calendars/<int:calendar_id>", methods=["PUT"], endpoint="calendars_update")
    @api_view
    def calendars_update(calendar_id: int):
        payload = json_body()
        calendar = container.calendar_store.update(
            calendar_id,
            name=payload.get("name"),
            start_date=payload.get("start_date"),
            end_date=payload.get("end_date"),
            description=payload.get("description"),
        )
        return api_ok(calendar)

    @app.route("/api/calendars/<int:calendar_id>", methods=["DELETE"], endpoint="calendars_delete")
    @api_view
    def calendars_delete(calendar_id: int):
        container.calendar_store.delete(calendar_id)
        return api_ok({"id": calendar_id})

    @app.route("/api/calendars/<int:calendar_id>/activate", methods=["POST"], endpoint="calendars_activate")
    @api_view
    def calendars_activate(calendar_id: int):
        return api_ok(container.calendar_store.activate(calendar_id))
