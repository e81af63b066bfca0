import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SCAN_RATE_LIMIT_SECONDS = 60
DEFAULT_GRACE_MINUTES = 10
STRICT_SCHEDULE_MATCH = False

NOTIFY_ADMINS_ON_IRREGULARITY = False
LATE_ARRIVAL_ALERTS = True
ABSENCE_ALERTS = True
NOTIFICATION_WORKERS = 1
