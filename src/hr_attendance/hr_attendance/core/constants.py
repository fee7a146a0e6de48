"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORK_START = "09:00"
DEFAULT_WORK_END = "17:00"
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_HALF_DAY_HOURS = 4.0
DEFAULT_REMOTE_TIMEOUT_SECONDS = 5.0
DEFAULT_REPORT_DAYS = 7
DEFAULT_PENDING_SPOOL = ".attendance_pending.json"

# Per-day locks are striped; distinct days may share a stripe.
LOCK_STRIPES = 64

DAY_KEY_FORMAT = "%Y-%m-%d"
TIME_OF_DAY_FORMAT = "%H:%M"
