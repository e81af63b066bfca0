"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

RFID_LENGTH = 10
SCAN_RATE_LIMIT_SECONDS = 60
DEFAULT_GRACE_MINUTES = 10
REMINDER_LEAD_MINUTES = (30, 15)
IMMINENT_REMINDER_MINUTES = 15
DEFAULT_NOTIFICATION_WORKERS = 2
