"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HOURS_DECIMALS = 2
DAYS_PER_WEEK = 7
MIN_LEAVE_REASON_LENGTH = 10
DEFAULT_MANAGER_ID = 1
DEFAULT_REVIEWER = "HR Manager"
EMAIL_PATTERN = r"\S+@\S+\.\S+"
