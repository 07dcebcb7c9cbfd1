"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_PER_WEEK = 7
MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60

# Weeks start on Monday (datetime.weekday() == 0).
WEEK_STARTS_ON = 0

DEFAULT_SCHOOL_YEARS_AHEAD = 3
