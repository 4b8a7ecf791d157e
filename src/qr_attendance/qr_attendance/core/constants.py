"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY = "qr_attendance_data"
DEFAULT_SESSION_TTL_SECONDS = 5 * 60
DEFAULT_EXPIRY_POLL_SECONDS = 3
DEFAULT_MIRROR_TIMEOUT_SECONDS = 5
GOOD_ATTENDANCE_PERCENT = 75
WARNING_ATTENDANCE_PERCENT = 50
