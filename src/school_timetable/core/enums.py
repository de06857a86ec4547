from __future__ import annotations

from enum import Enum, IntEnum


class TermType(str, Enum):
    """Kind of calendar term shown on the calendar views."""

    SEMESTER = "semester"
    QUARTER = "quarter"
    TRIMESTER = "trimester"
    TERM = "term"
    BREAK = "break"
    HOLIDAY = "holiday"


class ErrorKind(str, Enum):
    """Error taxonomy reported to callers of every mutation."""

    VALIDATION = "VALIDATION"
    RANGE_VIOLATION = "RANGE_VIOLATION"
    OVERLAP = "OVERLAP"
    BREAK_TIMESLOT_ASSIGNMENT = "BREAK_TIMESLOT_ASSIGNMENT"
    REFERENTIAL_BLOCK = "REFERENTIAL_BLOCK"
    TRANSIENT = "TRANSIENT"


class Weekday(IntEnum):
    """Day-of-week numbering used by timeslots and timetable entries (Sunday first)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
