"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_OFFICIAL_START = "09:00"
DEFAULT_LATE_GRACE_MINUTES = 5
DEFAULT_OFF_STATUSES = ("absent", "leave", "official_off")
DEFAULT_API_TIMEOUT = 15

EMPTY_DURATION = "—"
INVALID_DURATION = "Invalid"
UNKNOWN_DEPARTMENT = "—"
