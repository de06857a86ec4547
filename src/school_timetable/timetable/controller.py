from __future__ import annotations

from flask import Flask, request

from ..common.http import api_ok, api_superseded, api_view, as_bool, json_body
from ..common.validators import require_positive_id
from ..container import Container
from .model import EntryFilter


def _entry_fields(payload: dict) -> dict:
    return {
        "class_id": payload.get("class_id"),
        "subject_id": payload.get("subject_id"),
        "teacher_id": payload.get("teacher_id"),
        "timeslot_id": payload.get("timeslot_id"),
        "room_id": payload.get("room_id"),
        "day_of_week": payload.get("day_of_week"),
        "recurring": as_bool(payload.get("recurring"), default=True),
        "start_date": payload.get("start_date"),
        "end_date": payload.get("end_date"),
    }


def _entry_filter() -> EntryFilter:
    subject_id = request.args.get("subject_id")
    return EntryFilter(
        class_id=request.args.get("class_id") or None,
        teacher_id=request.args.get("teacher_id") or None,
        subject_id=require_positive_id(subject_id, "subject_id") if subject_id else None,
    )


def _calendar_id():
    value = request.args.get("calendar_id")
    return require_positive_id(value, "calendar_id") if value else None


def _generation():
    value = request.args.get("generation")
    return require_positive_id(value, "generation") if value else None


def register(app: Flask, container: Container) -> None:
    def latest(kind: str, query):
        # Clients that send ?view=... get stale answers dropped.
        view = request.args.get("view")
        if not view:
            return api_ok(query())
        generation = _generation()
        result = container.query_engine.latest((kind, view), generation, query)
        if result is None:
            return api_superseded(generation)
        return api_ok(result)

    @app.route("/api/timetable/entries", methods=["GET"], endpoint="timetable_entries_list")
    @api_view
    def timetable_entries_list():
        return api_ok(container.scheduler.list_entries(_entry_filter()))

    @app.route("/api/timetable/entries", methods=["POST"], endpoint="timetable_entries_create")
    @api_view
    def timetable_entries_create():
        return api_ok(container.scheduler.create_entry(**_entry_fields(json_body())), 201)

    @app.route("/api/timetable/entries/<int:entry_id>", methods=["PUT"], endpoint="timetable_entries_update")
    @api_view
    def timetable_entries_update(entry_id: int):
        return api_ok(container.scheduler.update_entry(entry_id, **_entry_fields(json_body())))

    @app.route("/api/timetable/entries/<int:entry_id>", methods=["DELETE"], endpoint="timetable_entries_delete")
    @api_view
    def timetable_entries_delete(entry_id: int):
        container.scheduler.delete_entry(entry_id)
        return api_ok({"id": entry_id})

    @app.route("/api/timetable/entries/<int:entry_id>/terms", methods=["GET"], endpoint="timetable_entry_terms")
    @api_view
    def timetable_entry_terms(entry_id: int):
        entry = container.scheduler.get_entry(entry_id)
        return api_ok(container.query_engine.terms_for_entry(entry, calendar_id=_calendar_id()))

    @app.route("/api/timetable/day", methods=["GET"], endpoint="timetable_day")
    @api_view
    def timetable_day():
        entry_filter, calendar_id = _entry_filter(), _calendar_id()
        return latest(
            "day",
            lambda: container.query_engine.day_schedule(request.args.get("date"), entry_filter, calendar_id=calendar_id),
        )

    @app.route("/api/timetable/on-date", methods=["GET"], endpoint="timetable_on_date")
    @api_view
    def timetable_on_date():
        entry_filter = _entry_filter()
        return latest("on-date", lambda: container.query_engine.entries_on_date(request.args.get("date"), entry_filter))

    @app.route("/api/timetable/week", methods=["GET"], endpoint="timetable_week")
    @api_view
    def timetable_week():
        entry_filter = _entry_filter()
        return latest("week", lambda: container.query_engine.weekly_grid(entry_filter))

    @app.route("/api/timetable/week/cell", methods=["GET"], endpoint="timetable_week_cell")
    @api_view
    def timetable_week_cell():
        entries = container.query_engine.weekly_day_entries(
            require_positive_id(request.args.get("timeslot_id"), "timeslot_id"),
            request.args.get("day_of_week"),
            _entry_filter(),
        )
        return api_ok(entries)

    @app.route("/api/terms/overlapping", methods=["GET"], endpoint="terms_overlapping")
    @api_view
    def terms_overlapping():
        terms = container.query_engine.terms_overlapping_range(
            request.args.get("start"), request.args.get("end"), calendar_id=_calendar_id()
        )
        return api_ok(terms)
