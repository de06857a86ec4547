from __future__ import annotations

from flask import Flask

from ..common.http import api_ok, api_view, as_bool, json_body
from ..container import Container


def _timeslot_fields(payload: dict) -> dict:
    return {
        "name": payload.get("name"),
        "start_time": payload.get("start_time"),
        "end_time": payload.get("end_time"),
        "day_of_week": payload.get("day_of_week"),
        "is_break": as_bool(payload.get("is_break")),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timeslots", methods=["GET"], endpoint="timeslots_list")
    @api_view
    def timeslots_list():
        return api_ok(container.timeslot_catalog.list_timeslots())

    @app.route("/api/timeslots", methods=["POST"], endpoint="timeslots_create")
    @api_view
    def timeslots_create():
        return api_ok(container.timeslot_catalog.create(**_timeslot_fields(json_body())), 201)

    @app.route("/api/timeslots/<int:timeslot_id>", methods=["PUT"], endpoint="timeslots_update")
    @api_view
    def timeslots_update(timeslot_id: int):
        return api_ok(container.timeslot_catalog.update(timeslot_id, **_timeslot_fields(json_body())))

    @app.route("/api/timeslots/<int:timeslot_id>", methods=["DELETE"], endpoint="timeslots_delete")
    @api_view
    def timeslots_delete(timeslot_id: int):
        container.timeslot_catalog.delete(timeslot_id)
        return api_ok({"id": timeslot_id})
