"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINOR_UNITS_PER_MAJOR = 100
MILLISECONDS_PER_HOUR = 3_600_000
HOURS_PER_DAY = 24

DEFAULT_LIST_LIMIT = 500
DEFAULT_REPORT_DAYS = 30
