import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

SCAN_RATE_LIMIT_SECONDS = int(os.getenv("SCAN_RATE_LIMIT_SECONDS", "60"))
DEFAULT_GRACE_MINUTES = int(os.getenv("DEFAULT_GRACE_MINUTES", "10"))
STRICT_SCHEDULE_MATCH = bool(int(os.getenv("STRICT_SCHEDULE_MATCH", "1")))

NOTIFY_ADMINS_ON_IRREGULARITY = bool(int(os.getenv("NOTIFY_ADMINS_ON_IRREGULARITY", "1")))
LATE_ARRIVAL_ALERTS = bool(int(os.getenv("LATE_ARRIVAL_ALERTS", "1")))
ABSENCE_ALERTS = bool(int(os.getenv("ABSENCE_ALERTS", "1")))
NOTIFICATION_WORKERS = int(os.getenv("NOTIFICATION_WORKERS", "4"))
