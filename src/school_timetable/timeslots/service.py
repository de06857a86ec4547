from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import require_hms_time
from ..common.validators import optional_day_of_week, require_non_empty, require_positive_id
from ..core.exceptions import BreakTimeslotAssignmentError, NotFoundError, RangeViolationError, ReferentialBlockError
from ..timetable.repository import TimetableRepository
from .model import Timeslot
from .repository import TimeslotRepository

logger = logging.getLogger(__name__)


class TimeslotCatalog:
    def __init__(
        self,
        timeslots: TimeslotRepository,
        entries: TimetableRepository,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._timeslots = timeslots
        self._entries = entries
        self._on_change = on_change

    def list_timeslots(self) -> Sequence[Timeslot]:
        return self._timeslots.list_all()

    def get(self, timeslot_id: int) -> Timeslot:
        timeslot = self._timeslots.get_by_id(require_positive_id(timeslot_id, "timeslot_id"))
        if timeslot is None:
            raise NotFoundError(f"Timeslot {timeslot_id} not found")
        return timeslot

    def create(
        self,
        *,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: Any = None,
        is_break: bool = False,
    ) -> Timeslot:
        fields = self._validate(name=name, start_time=start_time, end_time=end_time, day_of_week=day_of_week)
        timeslot_id = self._timeslots.create(**fields, is_break=bool(is_break))
        logger.debug("Created timeslot: %s (id=%s, break=%s)", fields["name"], timeslot_id, bool(is_break))
        self._changed()
        return self.get(timeslot_id)

    def update(
        self,
        timeslot_id: int,
        *,
        name: str,
        start_time: str,
        end_time: str,
        day_of_week: Any = None,
        is_break: bool = False,
    ) -> Timeslot:
        existing = self.get(timeslot_id)
        fields = self._validate(name=name, start_time=start_time, end_time=end_time, day_of_week=day_of_week)
        if is_break and not existing.is_break:
            in_use = self._entries.count_for_timeslot(existing.id)
            if in_use:
                logger.info("Refused to turn timeslot %s into a break: used by %s entries", existing.id, in_use)
                raise BreakTimeslotAssignmentError(
                    f"Timeslot '{existing.name}' has {in_use} timetable entr{'y' if in_use == 1 else 'ies'}; "
                    "move them before marking it a break"
                )
        self._timeslots.update(timeslot_id=existing.id, **fields, is_break=bool(is_break))
        logger.debug("Updated timeslot: %s (id=%s)", fields["name"], existing.id)
        self._changed()
        return self.get(existing.id)

    def delete(self, timeslot_id: int) -> None:
        timeslot = self.get(timeslot_id)
        in_use = self._entries.count_for_timeslot(timeslot.id)
        if in_use:
            logger.info("Refused to delete timeslot %s: used by %s entries", timeslot.id, in_use)
            raise ReferentialBlockError(
                f"Timeslot '{timeslot.name}' is used by {in_use} timetable entr{'y' if in_use == 1 else 'ies'}"
            )
        self._timeslots.delete(timeslot_id=timeslot.id)
        logger.debug("Deleted timeslot id=%s", timeslot.id)
        self._changed()

    @staticmethod
    def _validate(*, name: str, start_time: str, end_time: str, day_of_week: Any) -> dict:
        name = require_non_empty(name, "name")
        start_time = require_hms_time(start_time, "start_time")
        end_time = require_hms_time(end_time, "end_time")
        if start_time >= end_time:
            raise RangeViolationError(f"Timeslot '{name}': start {start_time} must be before end {end_time}")
        return {
            "name": name,
            "start_time": start_time,
            "end_time": end_time,
            "day_of_week": optional_day_of_week(day_of_week),
        }

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
