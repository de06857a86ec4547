from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from school_timetable.calendars.model import SchoolCalendar
from school_timetable.container import build_container_from_repositories
from school_timetable.core.enums import TermType
from school_timetable.holidays.model import Holiday
from school_timetable.rooms.model import Room
from school_timetable.terms.model import CalendarTerm
from school_timetable.timeslots.model import Timeslot
from school_timetable.timetable.model import EntryDraft, TimetableEntry


class _Table:
    def __init__(self):
        self.rows: dict = {}
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id


class InMemoryCalendars(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda c: (c.start_date, c.id))

    def get_by_id(self, calendar_id: int) -> Optional[SchoolCalendar]:
        return self.rows.get(int(calendar_id))

    def get_active(self):
        active = [c for c in self.list_all() if c.is_active]
        return active[0] if active else None

    def create(self, *, name, start_date, end_date, description=None, is_active=False) -> int:
        cid = self.next_id()
        self.rows[cid] = SchoolCalendar(
            id=cid, name=name, start_date=start_date, end_date=end_date, description=description
        )
        if is_active:
            self.activate(calendar_id=cid)
        return cid

    def update(self, *, calendar_id, name, start_date, end_date, description=None) -> None:
        self.rows[calendar_id] = replace(
            self.rows[calendar_id], name=name, start_date=start_date, end_date=end_date, description=description
        )

    def delete(self, *, calendar_id) -> bool:
        return self.rows.pop(int(calendar_id), None) is not None

    def activate(self, *, calendar_id) -> None:
        for cid, cal in list(self.rows.items()):
            self.rows[cid] = replace(cal, is_active=(cid == calendar_id))


class InMemoryTerms(_Table):
    def list_for_calendar(self, calendar_id):
        terms = [t for t in self.rows.values() if t.calendar_id == int(calendar_id)]
        return sorted(terms, key=lambda t: (t.start_date, t.id))

    def get_by_id(self, term_id) -> Optional[CalendarTerm]:
        return self.rows.get(int(term_id))

    def count_for_calendar(self, calendar_id) -> int:
        return len(self.list_for_calendar(calendar_id))

    def create(
        self, *, calendar_id, name, start_date, end_date, is_break, term_type, is_current=False, description=None
    ) -> int:
        tid = self.next_id()
        self.rows[tid] = CalendarTerm(
            id=tid,
            calendar_id=calendar_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=is_break,
            term_type=TermType(term_type),
            description=description,
        )
        if is_current:
            self.set_current(calendar_id=calendar_id, term_id=tid)
        return tid

    def update(
        self, *, term_id, name, start_date, end_date, is_break, term_type, is_current=False, description=None
    ) -> None:
        term = self.rows[term_id]
        self.rows[term_id] = replace(
            term,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=is_break,
            term_type=TermType(term_type),
            description=description,
            is_current=False,
        )
        if is_current:
            self.set_current(calendar_id=term.calendar_id, term_id=term_id)

    def delete(self, *, term_id) -> bool:
        return self.rows.pop(int(term_id), None) is not None

    def set_current(self, *, calendar_id, term_id) -> None:
        for tid, term in list(self.rows.items()):
            if term.calendar_id == calendar_id:
                self.rows[tid] = replace(term, is_current=(tid == term_id))


class InMemoryHolidays(_Table):
    def list_for_calendar(self, calendar_id):
        return sorted((h for h in self.rows.values() if h.calendar_id == int(calendar_id)), key=lambda h: h.date)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda h: (h.date, h.id))

    def get_by_id(self, holiday_id) -> Optional[Holiday]:
        return self.rows.get(int(holiday_id))

    def create(self, *, calendar_id, name, date, recurring=False) -> int:
        hid = self.next_id()
        self.rows[hid] = Holiday(id=hid, calendar_id=calendar_id, name=name, date=date, recurring=recurring)
        return hid

    def update(self, *, holiday_id, name, date, recurring=False) -> None:
        self.rows[holiday_id] = replace(self.rows[holiday_id], name=name, date=date, recurring=recurring)

    def delete(self, *, holiday_id) -> bool:
        return self.rows.pop(int(holiday_id), None) is not None


class InMemoryTimeslots(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda t: (t.start_time, t.id))

    def get_by_id(self, timeslot_id) -> Optional[Timeslot]:
        return self.rows.get(int(timeslot_id))

    def create(self, *, name, start_time, end_time, day_of_week=None, is_break=False) -> int:
        tid = self.next_id()
        self.rows[tid] = Timeslot(
            id=tid, name=name, start_time=start_time, end_time=end_time, day_of_week=day_of_week, is_break=is_break
        )
        return tid

    def update(self, *, timeslot_id, name, start_time, end_time, day_of_week=None, is_break=False) -> None:
        self.rows[timeslot_id] = replace(
            self.rows[timeslot_id],
            name=name,
            start_time=start_time,
            end_time=end_time,
            day_of_week=day_of_week,
            is_break=is_break,
        )

    def delete(self, *, timeslot_id) -> bool:
        return self.rows.pop(int(timeslot_id), None) is not None


class InMemoryRooms(_Table):
    def list_all(self):
        return sorted(self.rows.values(), key=lambda r: (r.name, r.id))

    def get_by_id(self, room_id) -> Optional[Room]:
        return self.rows.get(int(room_id))

    def create(self, *, name, capacity=None, description=None) -> int:
        rid = self.next_id()
        self.rows[rid] = Room(id=rid, name=name, capacity=capacity, description=description)
        return rid

    def update(self, *, room_id, name, capacity=None, description=None) -> None:
        self.rows[room_id] = replace(self.rows[room_id], name=name, capacity=capacity, description=description)

    def delete(self, *, room_id) -> bool:
        return self.rows.pop(int(room_id), None) is not None


class InMemoryEntries(_Table):
    def __init__(self):
        super().__init__()
        self.list_calls = 0

    def list_entries(self, *, class_id=None, teacher_id=None, subject_id=None, day_of_week=None):
        self.list_calls += 1
        out = []
        for entry in sorted(self.rows.values(), key=lambda e: (e.day_of_week, e.id)):
            if class_id is not None and entry.class_id != class_id:
                continue
            if teacher_id is not None and entry.teacher_id != teacher_id:
                continue
            if subject_id is not None and entry.subject_id != subject_id:
                continue
            if day_of_week is not None and entry.day_of_week != day_of_week:
                continue
            out.append(entry)
        return out

    def get_by_id(self, entry_id) -> Optional[TimetableEntry]:
        return self.rows.get(int(entry_id))

    def create(self, draft: EntryDraft) -> int:
        eid = self.next_id()
        self.rows[eid] = TimetableEntry.from_draft(eid, draft)
        return eid

    def replace(self, *, entry_id, draft: EntryDraft) -> None:
        self.rows[entry_id] = TimetableEntry.from_draft(entry_id, draft)

    def delete(self, *, entry_id) -> bool:
        return self.rows.pop(int(entry_id), None) is not None

    def count_for_timeslot(self, timeslot_id) -> int:
        return sum(1 for e in self.rows.values() if e.timeslot_id == int(timeslot_id))

    def count_for_room(self, room_id) -> int:
        return sum(1 for e in self.rows.values() if e.room_id == int(room_id))


@pytest.fixture
def repos():
    return dict(
        calendars_repo=InMemoryCalendars(),
        terms_repo=InMemoryTerms(),
        holidays_repo=InMemoryHolidays(),
        timeslots_repo=InMemoryTimeslots(),
        rooms_repo=InMemoryRooms(),
        entries_repo=InMemoryEntries(),
    )


@pytest.fixture
def container(repos):
    return build_container_from_repositories(**repos)


@pytest.fixture
def school_year(container):
    """Calendar "2024-2025" with a Fall term."""

    calendar = container.calendar_store.create(
        name="2024-2025", start_date="2024-08-01", end_date="2025-06-30", is_active=True
    )
    fall = container.term_ledger.add_term(
        calendar_id=calendar.id, name="Fall", start_date="2024-08-01", end_date="2024-12-20", term_type="semester"
    )
    return calendar, fall


@pytest.fixture
def periods(container):
    """Timeslots "Period 1", "Period 2" and a "Break"."""

    period_1 = container.timeslot_catalog.create(name="Period 1", start_time="08:00:00", end_time="08:45:00")
    brk = container.timeslot_catalog.create(name="Break", start_time="10:00:00", end_time="10:15:00", is_break=True)
    period_2 = container.timeslot_catalog.create(name="Period 2", start_time="08:50:00", end_time="09:35:00")
    return period_1, period_2, brk


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from school_timetable.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
