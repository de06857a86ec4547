from __future__ import annotations

from flask import Flask

from ..common.http import api_ok, api_view, as_bool, json_body
from ..container import Container


def _term_fields(payload: dict) -> dict:
    return {
        "name": payload.get("name"),
        "start_date": payload.get("start_date"),
        "end_date": payload.get("end_date"),
        "is_break": as_bool(payload.get("is_break")),
        "term_type": payload.get("term_type"),
        "is_current": as_bool(payload.get("is_current")),
        "description": payload.get("description"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendars/<int:calendar_id>/terms", methods=["GET"], endpoint="terms_list")
    @api_view
    def terms_list(calendar_id: int):
        return api_ok(container.term_ledger.list_terms(calendar_id))

    @app.route("/api/calendars/<int:calendar_id>/terms", methods=["POST"], endpoint="terms_add")
    @api_view
    def terms_add(calendar_id: int):
        term = container.term_ledger.add_term(calendar_id=calendar_id, **_term_fields(json_body()))
        return api_ok(term, 201)

    @app.route("/api/calendars/<int:calendar_id>/terms/current", methods=["GET"], endpoint="terms_current")
    @api_view
    def terms_current(calendar_id: int):
        return api_ok(container.term_ledger.current_term(calendar_id))

    @app.route("/api/terms/<int:term_id>", methods=["PUT"], endpoint="terms_edit")
    @api_view
    def terms_edit(term_id: int):
        return api_ok(container.term_ledger.edit_term(term_id, **_term_fields(json_body())))

    @app.route("/api/terms/<int:term_id>", methods=["DELETE"], endpoint="terms_delete")
    @api_view
    def terms_delete(term_id: int):
        container.term_ledger.delete_term(term_id)
        return api_ok({"id": term_id})

    @app.route("/api/terms/<int:term_id>/current", methods=["POST"], endpoint="terms_set_current")
    @api_view
    def terms_set_current(term_id: int):
        return api_ok(container.term_ledger.set_current_term(term_id))
