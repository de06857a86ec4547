from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import require_iso_date
from ..common.validators import optional_text, require_non_empty, require_ordered, require_positive_id
from ..core.exceptions import NotFoundError, RangeViolationError, ReferentialBlockError
from ..holidays.repository import HolidayRepository
from ..terms.repository import TermRepository
from .model import SchoolCalendar
from .repository import CalendarRepository

logger = logging.getLogger(__name__)


class CalendarStore:
    def __init__(self, calendars: CalendarRepository, terms: TermRepository, holidays: HolidayRepository):
        self._calendars = calendars
        self._terms = terms
        self._holidays = holidays

    def list_calendars(self) -> Sequence[SchoolCalendar]:
        return self._calendars.list_all()

    def get(self, calendar_id: int) -> SchoolCalendar:
        calendar = self._calendars.get_by_id(require_positive_id(calendar_id, "calendar_id"))
        if calendar is None:
            raise NotFoundError(f"Calendar {calendar_id} not found")
        return calendar

    def get_active(self) -> Optional[SchoolCalendar]:
        return self._calendars.get_active()

    def create(
        self,
        *,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
        is_active: bool = False,
    ) -> SchoolCalendar:
        name = require_non_empty(name, "name")
        start_date = require_iso_date(start_date, "start_date")
        end_date = require_iso_date(end_date, "end_date")
        require_ordered(start_date, end_date, f"Calendar '{name}'")

        calendar_id = self._calendars.create(
            name=name,
            start_date=start_date,
            end_date=end_date,
            description=optional_text(description),
            is_active=bool(is_active),
        )
        logger.debug("Created calendar: %s (id=%s)", name, calendar_id)
        return self.get(calendar_id)

    def update(
        self,
        calendar_id: int,
        *,
        name: str,
        start_date: str,
        end_date: str,
        description: Optional[str] = None,
    ) -> SchoolCalendar:
        existing = self.get(calendar_id)
        name = require_non_empty(name, "name")
        start_date = require_iso_date(start_date, "start_date")
        end_date = require_iso_date(end_date, "end_date")
        require_ordered(start_date, end_date, f"Calendar '{name}'")

        # Shrinking the envelope must not strand existing terms or holidays.
        for term in self._terms.list_for_calendar(existing.id):
            if term.start_date < start_date or term.end_date > end_date:
                raise RangeViolationError(
                    f"Term '{term.name}' ({term.start_date} to {term.end_date}) would fall outside the calendar"
                )
        for holiday in self._holidays.list_for_calendar(existing.id):
            if not start_date <= holiday.date <= end_date:
                raise RangeViolationError(f"Holiday '{holiday.name}' ({holiday.date}) would fall outside the calendar")

        self._calendars.update(
            calendar_id=existing.id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            description=optional_text(description),
        )
        logger.debug("Updated calendar: %s (id=%s)", name, existing.id)
        return self.get(existing.id)

    def delete(self, calendar_id: int) -> None:
        calendar = self.get(calendar_id)
        term_count = self._terms.count_for_calendar(calendar.id)
        if term_count:
            logger.info("Refused to delete calendar %s: %s term(s) attached", calendar.id, term_count)
            raise ReferentialBlockError(
                f"Calendar '{calendar.name}' still has {term_count} term(s); delete them first"
            )
        holiday_count = len(self._holidays.list_for_calendar(calendar.id))
        if holiday_count:
            logger.info("Refused to delete calendar %s: %s holiday(s) attached", calendar.id, holiday_count)
            raise ReferentialBlockError(
                f"Calendar '{calendar.name}' still has {holiday_count} holiday(s); delete them first"
            )
        self._calendars.delete(calendar_id=calendar.id)
        logger.debug("Deleted calendar id=%s", calendar.id)

    def activate(self, calendar_id: int) -> SchoolCalendar:
        """Make ``calendar_id`` the only active calendar. Idempotent."""

        calendar = self.get(calendar_id)
        self._calendars.activate(calendar_id=calendar.id)
        logger.debug("Active calendar is now %s", calendar.id)
        return self.get(calendar.id)
