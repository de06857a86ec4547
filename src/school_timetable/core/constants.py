"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"
HMS_TIME_FORMAT = "%H:%M:%S"

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10
DEFAULT_QUERY_CACHE_SIZE = 64

DAYS_PER_WEEK = 7
