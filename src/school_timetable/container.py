from __future__ import annotations

from dataclasses import dataclass

from .calendars.mysql_calendar_repository import MySQLCalendarRepository
from .calendars.repository import CalendarRepository
from .calendars.service import CalendarStore
from .core.constants import DEFAULT_QUERY_CACHE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayRegister
from .rooms.mysql_room_repository import MySQLRoomRepository
from .rooms.repository import RoomRepository
from .rooms.service import RoomService
from .terms.mysql_term_repository import MySQLTermRepository
from .terms.repository import TermRepository
from .terms.service import TermLedger
from .timeslots.mysql_timeslot_repository import MySQLTimeslotRepository
from .timeslots.repository import TimeslotRepository
from .timeslots.service import TimeslotCatalog
from .timetable.mysql_timetable_repository import MySQLTimetableRepository
from .timetable.query import ScheduleQueryEngine
from .timetable.query_cache import CacheScope
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableScheduler


@dataclass(frozen=True)
class Container:
    calendars_repo: CalendarRepository
    terms_repo: TermRepository
    holidays_repo: HolidayRepository
    timeslots_repo: TimeslotRepository
    rooms_repo: RoomRepository
    entries_repo: TimetableRepository

    cache_scope: CacheScope

    calendar_store: CalendarStore
    term_ledger: TermLedger
    holiday_register: HolidayRegister
    timeslot_catalog: TimeslotCatalog
    room_service: RoomService
    scheduler: TimetableScheduler
    query_engine: ScheduleQueryEngine


def build_container_from_repositories(
    *,
    calendars_repo: CalendarRepository,
    terms_repo: TermRepository,
    holidays_repo: HolidayRepository,
    timeslots_repo: TimeslotRepository,
    rooms_repo: RoomRepository,
    entries_repo: TimetableRepository,
    query_cache_size: int = DEFAULT_QUERY_CACHE_SIZE,
) -> Container:
    cache_scope = CacheScope(max_entries=query_cache_size)

    calendar_store = CalendarStore(calendars_repo, terms_repo, holidays_repo)
    term_ledger = TermLedger(terms_repo, calendars_repo, on_change=cache_scope.invalidate)
    holiday_register = HolidayRegister(holidays_repo, calendars_repo)
    timeslot_catalog = TimeslotCatalog(timeslots_repo, entries_repo, on_change=cache_scope.invalidate)
    room_service = RoomService(rooms_repo, entries_repo)
    scheduler = TimetableScheduler(entries_repo, timeslots_repo, rooms_repo, on_change=cache_scope.invalidate)
    query_engine = ScheduleQueryEngine(
        entries_repo,
        timeslots_repo,
        terms_repo,
        calendars_repo,
        holidays_repo,
        cache=cache_scope,
    )

    return Container(
        calendars_repo=calendars_repo,
        terms_repo=terms_repo,
        holidays_repo=holidays_repo,
        timeslots_repo=timeslots_repo,
        rooms_repo=rooms_repo,
        entries_repo=entries_repo,
        cache_scope=cache_scope,
        calendar_store=calendar_store,
        term_ledger=term_ledger,
        holiday_register=holiday_register,
        timeslot_catalog=timeslot_catalog,
        room_service=room_service,
        scheduler=scheduler,
        query_engine=query_engine,
    )


def build_container(*, db_config: dict, query_cache_size: int = DEFAULT_QUERY_CACHE_SIZE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_container_from_repositories(
        calendars_repo=MySQLCalendarRepository(conn),
        terms_repo=MySQLTermRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        timeslots_repo=MySQLTimeslotRepository(conn),
        rooms_repo=MySQLRoomRepository(conn),
        entries_repo=MySQLTimetableRepository(conn),
        query_cache_size=query_cache_size,
    )
