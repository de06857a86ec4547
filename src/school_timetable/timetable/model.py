from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EntryDraft:
    """Validated timetable entry fields, before the store assigns an id."""

    class_id: str
    subject_id: int
    teacher_id: str
    timeslot_id: int
    day_of_week: int
    recurring: bool = True
    room_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass(frozen=True)
class TimetableEntry:
    """Class + subject + teacher (+ room) placed on a weekday and timeslot.

    Recurring entries repeat every week; dated entries only apply between
    ``start_date`` and ``end_date`` inclusive.
    """

    id: int
    class_id: str
    subject_id: int
    teacher_id: str
    timeslot_id: int
    day_of_week: int
    recurring: bool = True
    room_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_draft(cls, entry_id: int, draft: EntryDraft) -> "TimetableEntry":
        return cls(
            id=int(entry_id),
            class_id=draft.class_id,
            subject_id=draft.subject_id,
            teacher_id=draft.teacher_id,
            timeslot_id=draft.timeslot_id,
            day_of_week=draft.day_of_week,
            recurring=draft.recurring,
            room_id=draft.room_id,
            start_date=draft.start_date,
            end_date=draft.end_date,
        )


@dataclass(frozen=True)
class EntryFilter:
    """Optional equality filters used by the timetable views; ``None`` matches anything."""

    class_id: Optional[str] = None
    teacher_id: Optional[str] = None
    subject_id: Optional[int] = None

    def matches(self, entry: TimetableEntry) -> bool:
        return (
            (self.class_id is None or entry.class_id == self.class_id)
            and (self.teacher_id is None or entry.teacher_id == self.teacher_id)
            and (self.subject_id is None or entry.subject_id == self.subject_id)
        )

    def key(self) -> tuple:
        return (self.class_id, self.teacher_id, self.subject_id)


NO_FILTER = EntryFilter()
