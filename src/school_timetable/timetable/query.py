"""Read-only schedule queries.

Two questions are answered separately and must stay separate:

* ``entries_on_date`` - what is actually scheduled on a calendar date
  (weekday match plus the dated entry's window).
* ``weekly_day_entries`` / ``weekly_grid`` - what a typical week looks like
  (weekday and timeslot match only, date windows ignored).

Neither consults terms or holidays to hide entries; those are annotations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from ..calendars.repository import CalendarRepository
from ..common.datetime_utils import ranges_overlap, require_iso_date, weekday_of
from ..common.validators import require_day_of_week, require_ordered
from ..core.constants import DAYS_PER_WEEK
from ..holidays.model import Holiday
from ..holidays.repository import HolidayRepository
from ..terms.model import CalendarTerm
from ..terms.repository import TermRepository
from ..timeslots.model import Timeslot
from ..timeslots.repository import TimeslotRepository
from .model import NO_FILTER, EntryFilter, TimetableEntry
from .query_cache import CacheScope, RequestGenerations
from .repository import TimetableRepository

T = TypeVar("T")


@dataclass
class TimeslotGrouping:
    entries_by_timeslot: Dict[int, List[TimetableEntry]]
    timeslot_order: List[int]


@dataclass
class DaySlot:
    timeslot_id: int
    timeslot: Optional[Timeslot]
    entries: List[TimetableEntry]


@dataclass
class DaySchedule:
    date: str
    day_of_week: int
    slots: List[DaySlot]
    holidays: List[Holiday] = field(default_factory=list)
    terms_by_entry: Dict[int, List[CalendarTerm]] = field(default_factory=dict)


@dataclass
class WeeklyGridRow:
    timeslot: Timeslot
    cells: Dict[int, List[TimetableEntry]]


def is_entry_active_on(entry: TimetableEntry, day: str, day_of_week: int) -> bool:
    if entry.day_of_week != day_of_week:
        return False
    if entry.recurring:
        return True
    if not entry.start_date or not entry.end_date:
        return False
    return entry.start_date <= day <= entry.end_date


def entries_active_on(entries: Iterable[TimetableEntry], day: str) -> List[TimetableEntry]:
    day = require_iso_date(day, "date")
    w = weekday_of(day)
    return [e for e in entries if is_entry_active_on(e, day, w)]


def group_by_timeslot(entries: Iterable[TimetableEntry], timeslots: Iterable[Timeslot]) -> TimeslotGrouping:
    """Bucket entries per timeslot and order the buckets by start_time.

    Start times are fixed-width ``HH:MM:SS`` strings, so string order is
    chronological. Entries whose timeslot is unknown are kept and their
    buckets sort last.
    """

    by_id = {t.id: t for t in timeslots}
    grouped: Dict[int, List[TimetableEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.timeslot_id, []).append(entry)

    def sort_key(timeslot_id: int):
        timeslot = by_id.get(timeslot_id)
        if timeslot is None:
            return (1, "", timeslot_id)
        return (0, timeslot.start_time, timeslot_id)

    return TimeslotGrouping(entries_by_timeslot=grouped, timeslot_order=sorted(grouped, key=sort_key))


def terms_overlapping_range(start: str, end: str, terms: Iterable[CalendarTerm]) -> List[CalendarTerm]:
    """Terms (break or not) whose range overlaps ``[start, end]``."""

    return [t for t in terms if ranges_overlap(start, end, t.start_date, t.end_date)]


def weekly_day_entries(
    entries: Iterable[TimetableEntry], timeslot_id: int, day_of_week: int
) -> List[TimetableEntry]:
    return [e for e in entries if e.timeslot_id == timeslot_id and e.day_of_week == day_of_week]


class ScheduleQueryEngine:
    def __init__(
        self,
        entries: TimetableRepository,
        timeslots: TimeslotRepository,
        terms: TermRepository,
        calendars: CalendarRepository,
        holidays: HolidayRepository,
        *,
        cache: Optional[CacheScope] = None,
    ):
        self._entries = entries
        self._timeslots = timeslots
        self._terms = terms
        self._calendars = calendars
        self._holidays = holidays
        self._cache = cache if cache is not None else CacheScope()
        self.generations = RequestGenerations()

    @property
    def cache(self) -> CacheScope:
        return self._cache

    def latest(self, view: Hashable, generation: Optional[int], query: Callable[[], T]) -> Optional[T]:
        """Run ``query`` as generation ``generation`` of ``view``.

        Returns None when a newer generation of the same view started
        before or while the query ran; that result is superseded.
        """

        token = self.generations.begin(view, generation)
        if not self.generations.is_current(token, view):
            return None
        result = query()
        return result if self.generations.is_current(token, view) else None

    def entries_on_date(self, day: str, entry_filter: EntryFilter = NO_FILTER) -> List[TimetableEntry]:
        day = require_iso_date(day, "date")

        def compute():
            candidates = self._entries.list_entries(
                class_id=entry_filter.class_id,
                teacher_id=entry_filter.teacher_id,
                subject_id=entry_filter.subject_id,
                day_of_week=weekday_of(day),
            )
            return tuple(entries_active_on(candidates, day))

        return list(self._cache.get_or_compute(("entries_on_date", day, entry_filter.key()), compute))

    def group_by_timeslot(self, entries: Sequence[TimetableEntry]) -> TimeslotGrouping:
        return group_by_timeslot(entries, self._timeslots.list_all())

    def terms_overlapping_range(
        self, start: str, end: str, terms: Optional[Iterable[CalendarTerm]] = None, *, calendar_id: Optional[int] = None
    ) -> List[CalendarTerm]:
        start = require_iso_date(start, "start")
        end = require_iso_date(end, "end")
        require_ordered(start, end, "Range")
        if terms is None:
            terms = self._calendar_terms(calendar_id)
        return terms_overlapping_range(start, end, terms)

    def terms_for_entry(self, entry: TimetableEntry, *, calendar_id: Optional[int] = None) -> List[CalendarTerm]:
        """Derived term membership of a dated entry; recurring entries have none."""

        if entry.recurring or not entry.start_date or not entry.end_date:
            return []
        return terms_overlapping_range(entry.start_date, entry.end_date, self._calendar_terms(calendar_id))

    def weekly_day_entries(
        self,
        timeslot_id: int,
        day_of_week: int,
        entry_filter: EntryFilter = NO_FILTER,
        entries: Optional[Sequence[TimetableEntry]] = None,
    ) -> List[TimetableEntry]:
        day_of_week = require_day_of_week(day_of_week)
        if entries is None:
            entries = self._entries.list_entries(
                class_id=entry_filter.class_id,
                teacher_id=entry_filter.teacher_id,
                subject_id=entry_filter.subject_id,
                day_of_week=day_of_week,
            )
        else:
            entries = [e for e in entries if entry_filter.matches(e)]
        return weekly_day_entries(entries, int(timeslot_id), day_of_week)

    def weekly_grid(self, entry_filter: EntryFilter = NO_FILTER) -> List[WeeklyGridRow]:
        entries = self._entries.list_entries(
            class_id=entry_filter.class_id,
            teacher_id=entry_filter.teacher_id,
            subject_id=entry_filter.subject_id,
        )
        rows: List[WeeklyGridRow] = []
        for timeslot in sorted(self._timeslots.list_all(), key=lambda t: (t.start_time, t.id)):
            cells = {day: weekly_day_entries(entries, timeslot.id, day) for day in range(DAYS_PER_WEEK)}
            rows.append(WeeklyGridRow(timeslot=timeslot, cells=cells))
        return rows

    def day_schedule(
        self,
        day: str,
        entry_filter: EntryFilter = NO_FILTER,
        *,
        calendar_id: Optional[int] = None,
    ) -> DaySchedule:
        day = require_iso_date(day, "date")
        entries = self.entries_on_date(day, entry_filter)
        timeslots = self._timeslots.list_all()
        grouping = group_by_timeslot(entries, timeslots)
        by_id = {t.id: t for t in timeslots}

        slots = [
            DaySlot(timeslot_id=ts_id, timeslot=by_id.get(ts_id), entries=grouping.entries_by_timeslot[ts_id])
            for ts_id in grouping.timeslot_order
        ]

        terms = self._calendar_terms(calendar_id)
        terms_by_entry = {
            e.id: terms_overlapping_range(e.start_date, e.end_date, terms)
            for e in entries
            if not e.recurring and e.start_date and e.end_date
        }
        holidays = [h for h in self._holidays.list_all() if h.falls_on(day)]

        return DaySchedule(
            date=day,
            day_of_week=weekday_of(day),
            slots=slots,
            holidays=holidays,
            terms_by_entry=terms_by_entry,
        )

    def _calendar_terms(self, calendar_id: Optional[int]) -> Sequence[CalendarTerm]:
        if calendar_id is None:
            active = self._calendars.get_active()
            if active is None:
                return []
            calendar_id = active.id
        return self._terms.list_for_calendar(int(calendar_id))
