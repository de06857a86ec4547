from __future__ import annotations

from flask import Flask

from ..common.http import api_ok, api_view, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rooms", methods=["GET"], endpoint="rooms_list")
    @api_view
    def rooms_list():
        return api_ok(container.room_service.list_rooms())

    @app.route("/api/rooms", methods=["POST"], endpoint="rooms_create")
    @api_view
    def rooms_create():
        payload = json_body()
        room = container.room_service.create(
            name=payload.get("name"),
            capacity=payload.get("capacity"),
            description=payload.get("description"),
        )
        return api_ok(room, 201)

    @app.route("/api/rooms/<int:room_id>", methods=["PUT"], endpoint="rooms_update")
    @api_view
    def rooms_update(room_id: int):
        payload = json_body()
        room = container.room_service.update(
            room_id,
            name=payload.get("name"),
            capacity=payload.get("capacity"),
            description=payload.get("description"),
        )
        return api_ok(room)

    @app.route("/api/rooms/<int:room_id>", methods=["DELETE"], endpoint="rooms_delete")
    @api_view
    def rooms_delete(room_id: int):
        container.room_service.delete(room_id)
        return api_ok({"id": room_id})
