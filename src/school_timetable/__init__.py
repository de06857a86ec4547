"""School Timetable package.

Academic calendar and timetable scheduling core, organized by feature
modules (calendars, terms, holidays, timeslots, rooms, timetable) with a
thin Flask controller layer over service/repository layers.
"""
