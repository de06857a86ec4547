from __future__ import annotations

import logging
from typing import Sequence

from ..calendars.model import SchoolCalendar
from ..calendars.repository import CalendarRepository
from ..common.datetime_utils import require_iso_date
from ..common.validators import require_non_empty, require_positive_id
from ..core.exceptions import NotFoundError, RangeViolationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayRegister:
    """Holidays tied to a calendar. They annotate days; they never suppress timetable entries."""

    def __init__(self, holidays: HolidayRepository, calendars: CalendarRepository):
        self._holidays = holidays
        self._calendars = calendars

    def list_for_calendar(self, calendar_id: int) -> Sequence[Holiday]:
        return self._holidays.list_for_calendar(require_positive_id(calendar_id, "calendar_id"))

    def get(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(require_positive_id(holiday_id, "holiday_id"))
        if holiday is None:
            raise NotFoundError(f"Holiday {holiday_id} not found")
        return holiday

    def add(self, *, calendar_id: int, name: str, date: str, recurring: bool = False) -> Holiday:
        calendar = self._calendar(calendar_id)
        name = require_non_empty(name, "name")
        date = require_iso_date(date, "date")
        self._check_within(calendar, name, date)

        holiday_id = self._holidays.create(calendar_id=calendar.id, name=name, date=date, recurring=bool(recurring))
        logger.debug("Created holiday: %s (id=%s, date=%s)", name, holiday_id, date)
        return self.get(holiday_id)

    def update(self, holiday_id: int, *, name: str, date: str, recurring: bool = False) -> Holiday:
        existing = self.get(holiday_id)
        calendar = self._calendar(existing.calendar_id)
        name = require_non_empty(name, "name")
        date = require_iso_date(date, "date")
        self._check_within(calendar, name, date)

        self._holidays.update(holiday_id=existing.id, name=name, date=date, recurring=bool(recurring))
        logger.debug("Updated holiday: %s (id=%s)", name, existing.id)
        return self.get(existing.id)

    def delete(self, holiday_id: int) -> None:
        holiday_id = require_positive_id(holiday_id, "holiday_id")
        if not self._holidays.delete(holiday_id=holiday_id):
            raise NotFoundError(f"Holiday {holiday_id} not found")
        logger.debug("Deleted holiday id=%s", holiday_id)

    def holidays_on(self, day: str) -> list[Holiday]:
        day = require_iso_date(day, "date")
        return [h for h in self._holidays.list_all() if h.falls_on(day)]

    def _calendar(self, calendar_id: int) -> SchoolCalendar:
        calendar = self._calendars.get_by_id(require_positive_id(calendar_id, "calendar_id"))
        if calendar is None:
            raise NotFoundError(f"Calendar {calendar_id} not found")
        return calendar

    @staticmethod
    def _check_within(calendar: SchoolCalendar, name: str, date: str) -> None:
        if not calendar.start_date <= date <= calendar.end_date:
            logger.info("Rejected holiday '%s': outside calendar %s", name, calendar.id)
            raise RangeViolationError(
                f"Holiday '{name}' ({date}) must lie within calendar "
                f"'{calendar.name}' ({calendar.start_date} to {calendar.end_date})"
            )
