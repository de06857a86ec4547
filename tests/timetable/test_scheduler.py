import pytest

from school_timetable.core.enums import ErrorKind
from school_timetable.core.exceptions import (
    BreakTimeslotAssignmentError,
    NotFoundError,
    RangeViolationError,
    ValidationError,
)
from school_timetable.timetable.model import EntryFilter


def _entry(timeslot_id, **overrides):
    fields = {
        "class_id": "10A",
        "subject_id": 3,
        "teacher_id": "t-1",
        "timeslot_id": timeslot_id,
        "day_of_week": 1,
    }
    fields.update(overrides)
    return fields


def test_break_timeslot_rejects_entry_and_stores_nothing(container, periods):
    _, _, brk = periods

    with pytest.raises(BreakTimeslotAssignmentError) as exc_info:
        container.scheduler.create_entry(**_entry(brk.id))

    assert exc_info.value.kind is ErrorKind.BREAK_TIMESLOT_ASSIGNMENT
    assert not exc_info.value.retryable
    assert container.scheduler.list_entries() == []


def test_break_timeslot_rejects_update_too(container, periods):
    period_1, _, brk = periods
    entry = container.scheduler.create_entry(**_entry(period_1.id))

    with pytest.raises(BreakTimeslotAssignmentError):
        container.scheduler.update_entry(entry.id, **_entry(brk.id))

    assert container.scheduler.get_entry(entry.id).timeslot_id == period_1.id


def test_dated_entry_requires_both_dates(container, periods):
    period_1, _, _ = periods

    with pytest.raises(ValidationError):
        container.scheduler.create_entry(**_entry(period_1.id, recurring=False, start_date="2024-09-01"))


def test_dated_entry_window_must_be_ordered(container, periods):
    period_1, _, _ = periods

    with pytest.raises(RangeViolationError):
        container.scheduler.create_entry(
            **_entry(period_1.id, recurring=False, start_date="2024-10-01", end_date="2024-09-01")
        )


def test_recurring_entry_drops_dates(container, periods):
    period_1, _, _ = periods

    entry = container.scheduler.create_entry(
        **_entry(period_1.id, recurring=True, start_date="2024-09-01", end_date="2024-09-30")
    )

    assert entry.recurring
    assert entry.start_date is None and entry.end_date is None


def test_update_replaces_every_field(container, periods):
    period_1, period_2, _ = periods
    entry = container.scheduler.create_entry(**_entry(period_1.id, room_id=None))

    replaced = container.scheduler.update_entry(
        entry.id,
        **_entry(period_2.id, class_id="11B", day_of_week=3, recurring=False, start_date="2024-09-01", end_date="2024-09-30"),
    )

    stored = container.scheduler.get_entry(entry.id)
    assert stored == replaced
    assert (stored.class_id, stored.timeslot_id, stored.day_of_week) == ("11B", period_2.id, 3)
    assert (stored.start_date, stored.end_date) == ("2024-09-01", "2024-09-30")


def test_double_booking_is_allowed(container, periods):
    period_1, _, _ = periods
    room = container.room_service.create(name="Room 101")

    container.scheduler.create_entry(**_entry(period_1.id, class_id="10A", room_id=room.id))
    container.scheduler.create_entry(**_entry(period_1.id, class_id="10B", room_id=room.id))

    assert len(container.scheduler.list_entries(EntryFilter(teacher_id="t-1"))) == 2


def test_unknown_references_are_not_found(container, periods):
    period_1, _, _ = periods

    with pytest.raises(NotFoundError):
        container.scheduler.create_entry(**_entry(999))
    with pytest.raises(NotFoundError):
        container.scheduler.create_entry(**_entry(period_1.id, room_id=999))
    with pytest.raises(NotFoundError):
        container.scheduler.delete_entry(999)


def test_invalid_fields_are_validation_errors(container, periods):
    period_1, _, _ = periods

    for overrides in ({"day_of_week": 7}, {"class_id": ""}, {"teacher_id": None}, {"subject_id": "x"}):
        with pytest.raises(ValidationError):
            container.scheduler.create_entry(**_entry(period_1.id, **overrides))
    assert container.scheduler.list_entries() == []


def test_list_entries_filters(container, periods):
    period_1, period_2, _ = periods
    container.scheduler.create_entry(**_entry(period_1.id, class_id="10A", subject_id=3))
    container.scheduler.create_entry(**_entry(period_2.id, class_id="10B", subject_id=4))

    assert [e.class_id for e in container.scheduler.list_entries(EntryFilter(subject_id=4))] == ["10B"]
    assert [e.class_id for e in container.scheduler.list_entries(EntryFilter(class_id="10A"))] == ["10A"]


def test_timeslot_scenario(container, periods):
    period_1, _, brk = periods

    assert (period_1.start_time, period_1.end_time, period_1.is_break) == ("08:00:00", "08:45:00", False)
    assert (brk.start_time, brk.end_time, brk.is_break) == ("10:00:00", "10:15:00", True)
    with pytest.raises(BreakTimeslotAssignmentError):
        container.scheduler.create_entry(**_entry(brk.id))
    assert container.entries_repo.rows == {}
