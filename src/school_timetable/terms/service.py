from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..calendars.repository import CalendarRepository
from ..common.datetime_utils import ranges_overlap, require_iso_date
from ..common.validators import optional_text, require_non_empty, require_ordered, require_positive_id
from ..core.enums import TermType
from ..core.exceptions import NotFoundError, OverlapError, RangeViolationError, ValidationError
from .model import CalendarTerm
from .repository import TermRepository

logger = logging.getLogger(__name__)


def parse_term_type(value) -> TermType:
    if value is None or value == "":
        return TermType.TERM
    try:
        return TermType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in TermType)
        raise ValidationError(f"term_type must be one of: {allowed}") from None


class TermLedger:
    """Terms nested in a school calendar.

    Every term lies inside its calendar's range, non-break terms of the same
    calendar never overlap (see ``ranges_overlap``), and at most one term per
    calendar is flagged current.
    """

    def __init__(
        self,
        terms: TermRepository,
        calendars: CalendarRepository,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._terms = terms
        self._calendars = calendars
        self._on_change = on_change

    def list_terms(self, calendar_id: int) -> Sequence[CalendarTerm]:
        return self._terms.list_for_calendar(require_positive_id(calendar_id, "calendar_id"))

    def get_term(self, term_id: int) -> CalendarTerm:
        term = self._terms.get_by_id(require_positive_id(term_id, "term_id"))
        if term is None:
            raise NotFoundError(f"Term {term_id} not found")
        return term

    def add_term(
        self,
        *,
        calendar_id: int,
        name: str,
        start_date: str,
        end_date: str,
        is_break: bool = False,
        term_type: TermType | str | None = None,
        is_current: bool = False,
        description: Optional[str] = None,
    ) -> CalendarTerm:
        calendar_id = require_positive_id(calendar_id, "calendar_id")
        name, start_date, end_date, term_type = self._validate(
            calendar_id=calendar_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=bool(is_break),
            term_type=term_type,
            exclude_term_id=None,
        )

        term_id = self._terms.create(
            calendar_id=calendar_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=bool(is_break),
            term_type=term_type,
            is_current=bool(is_current),
            description=optional_text(description),
        )
        logger.debug("Created term: %s (id=%s, calendar_id=%s)", name, term_id, calendar_id)
        self._changed()
        return self.get_term(term_id)

    def edit_term(
        self,
        term_id: int,
        *,
        name: str,
        start_date: str,
        end_date: str,
        is_break: bool = False,
        term_type: TermType | str | None = None,
        is_current: bool = False,
        description: Optional[str] = None,
    ) -> CalendarTerm:
        existing = self.get_term(term_id)
        name, start_date, end_date, term_type = self._validate(
            calendar_id=existing.calendar_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=bool(is_break),
            term_type=term_type,
            exclude_term_id=existing.id,
        )

        self._terms.update(
            term_id=existing.id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_break=bool(is_break),
            term_type=term_type,
            is_current=bool(is_current),
            description=optional_text(description),
        )
        logger.debug("Updated term: %s (id=%s)", name, existing.id)
        self._changed()
        return self.get_term(existing.id)

    def delete_term(self, term_id: int) -> None:
        term_id = require_positive_id(term_id, "term_id")
        if not self._terms.delete(term_id=term_id):
            raise NotFoundError(f"Term {term_id} not found")
        logger.debug("Deleted term id=%s", term_id)
        self._changed()

    def set_current_term(self, term_id: int) -> CalendarTerm:
        term = self.get_term(term_id)
        self._terms.set_current(calendar_id=term.calendar_id, term_id=term.id)
        logger.debug("Current term for calendar %s is now %s", term.calendar_id, term.id)
        self._changed()
        return self.get_term(term.id)

    def current_term(self, calendar_id: int) -> Optional[CalendarTerm]:
        for term in self.list_terms(calendar_id):
            if term.is_current:
                return term
        return None

    def term_for_date(self, calendar_id: int, day: str) -> Optional[CalendarTerm]:
        """First instructional term of the calendar whose range contains ``day``."""

        day = require_iso_date(day, "date")
        for term in self.list_terms(calendar_id):
            if not term.is_break and term.contains(day):
                return term
        return None

    def find_overlap(
        self,
        *,
        calendar_id: int,
        start_date: str,
        end_date: str,
        exclude_term_id: Optional[int] = None,
    ) -> Optional[CalendarTerm]:
        for other in self._terms.list_for_calendar(calendar_id):
            if other.is_break or other.id == exclude_term_id:
                continue
            if ranges_overlap(start_date, end_date, other.start_date, other.end_date):
                return other
        return None

    def _validate(
        self,
        *,
        calendar_id: int,
        name: str,
        start_date: str,
        end_date: str,
        is_break: bool,
        term_type,
        exclude_term_id: Optional[int],
    ):
        name = require_non_empty(name, "name")
        start_date = require_iso_date(start_date, "start_date")
        end_date = require_iso_date(end_date, "end_date")
        term_type = parse_term_type(term_type)

        try:
            require_ordered(start_date, end_date, f"Term '{name}'")

            calendar = self._calendars.get_by_id(calendar_id)
            if calendar is None:
                raise NotFoundError(f"Calendar {calendar_id} not found")

            if start_date < calendar.start_date or end_date > calendar.end_date:
                raise RangeViolationError(
                    f"Term '{name}' ({start_date} to {end_date}) must lie within calendar "
                    f"'{calendar.name}' ({calendar.start_date} to {calendar.end_date})"
                )

            if not is_break:
                conflict = self.find_overlap(
                    calendar_id=calendar_id,
                    start_date=start_date,
                    end_date=end_date,
                    exclude_term_id=exclude_term_id,
                )
                if conflict is not None:
                    raise OverlapError(
                        f"Term '{name}' overlaps term '{conflict.name}' "
                        f"({conflict.start_date} to {conflict.end_date})",
                        conflicting=conflict,
                    )
        except (RangeViolationError, OverlapError) as exc:
            logger.info("Rejected term '%s': %s", name, exc.kind.value)
            raise

        return name, start_date, end_date, term_type

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
