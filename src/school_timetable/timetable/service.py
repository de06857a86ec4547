from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import require_iso_date
from ..common.validators import require_day_of_week, require_ordered, require_positive_id, require_reference
from ..core.exceptions import BreakTimeslotAssignmentError, NotFoundError, ValidationError
from ..rooms.repository import RoomRepository
from ..timeslots.repository import TimeslotRepository
from .model import NO_FILTER, EntryDraft, EntryFilter, TimetableEntry
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


class TimetableScheduler:
    """Create, replace and delete timetable entries.

    Entries may never sit in a break timeslot. Teacher and room
    double-booking is not checked: the same teacher or room may appear in
    two entries sharing a day and timeslot.
    """

    def __init__(
        self,
        entries: TimetableRepository,
        timeslots: TimeslotRepository,
        rooms: Optional[RoomRepository] = None,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._entries = entries
        self._timeslots = timeslots
        self._rooms = rooms
        self._on_change = on_change

    def list_entries(self, entry_filter: EntryFilter = NO_FILTER) -> Sequence[TimetableEntry]:
        return self._entries.list_entries(
            class_id=entry_filter.class_id,
            teacher_id=entry_filter.teacher_id,
            subject_id=entry_filter.subject_id,
        )

    def get_entry(self, entry_id: int) -> TimetableEntry:
        entry = self._entries.get_by_id(require_positive_id(entry_id, "entry_id"))
        if entry is None:
            raise NotFoundError(f"Timetable entry {entry_id} not found")
        return entry

    def create_entry(self, **fields: Any) -> TimetableEntry:
        draft = self._build_draft(**fields)
        entry_id = self._entries.create(draft)
        logger.debug(
            "Created timetable entry id=%s (class=%s, timeslot=%s, day=%s)",
            entry_id,
            draft.class_id,
            draft.timeslot_id,
            draft.day_of_week,
        )
        self._changed()
        return TimetableEntry.from_draft(entry_id, draft)

    def update_entry(self, entry_id: int, **fields: Any) -> TimetableEntry:
        existing = self.get_entry(entry_id)
        draft = self._build_draft(**fields)
        self._entries.replace(entry_id=existing.id, draft=draft)
        logger.debug("Replaced timetable entry id=%s", existing.id)
        self._changed()
        return TimetableEntry.from_draft(existing.id, draft)

    def delete_entry(self, entry_id: int) -> None:
        entry_id = require_positive_id(entry_id, "entry_id")
        if not self._entries.delete(entry_id=entry_id):
            raise NotFoundError(f"Timetable entry {entry_id} not found")
        logger.debug("Deleted timetable entry id=%s", entry_id)
        self._changed()

    def _build_draft(
        self,
        *,
        class_id: Any = None,
        subject_id: Any = None,
        teacher_id: Any = None,
        timeslot_id: Any = None,
        day_of_week: Any = None,
        recurring: bool = True,
        room_id: Any = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> EntryDraft:
        timeslot_id = require_positive_id(timeslot_id, "timeslot_id")
        timeslot = self._timeslots.get_by_id(timeslot_id)
        if timeslot is None:
            raise NotFoundError(f"Timeslot {timeslot_id} not found")
        if timeslot.is_break:
            logger.info("Rejected timetable entry: timeslot %s is a break", timeslot.id)
            raise BreakTimeslotAssignmentError(
                f"Cannot assign classes to break timeslot '{timeslot.name}' "
                f"({timeslot.start_time}-{timeslot.end_time})"
            )

        class_id = require_reference(class_id, "class_id")
        subject_id = require_positive_id(subject_id, "subject_id")
        teacher_id = require_reference(teacher_id, "teacher_id")
        day_of_week = require_day_of_week(day_of_week)

        if room_id is not None and room_id != "":
            room_id = require_positive_id(room_id, "room_id")
            if self._rooms is not None and self._rooms.get_by_id(room_id) is None:
                raise NotFoundError(f"Room {room_id} not found")
        else:
            room_id = None

        recurring = bool(recurring)
        if recurring:
            start_date = end_date = None
        else:
            if not start_date or not end_date:
                raise ValidationError("start_date and end_date are required for a non-recurring entry")
            start_date = require_iso_date(start_date, "start_date")
            end_date = require_iso_date(end_date, "end_date")
            require_ordered(start_date, end_date, "Timetable entry")

        return EntryDraft(
            class_id=class_id,
            subject_id=subject_id,
            teacher_id=teacher_id,
            timeslot_id=timeslot.id,
            day_of_week=day_of_week,
            recurring=recurring,
            room_id=room_id,
            start_date=start_date,
            end_date=end_date,
        )

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
