from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles that can own notifications."""

    ADMIN = "admin"
    TEACHER = "teacher"


class Direction(str, Enum):
    """Whether a scan checks a teacher in or out of a class."""

    IN = "in"
    OUT = "out"


class AttendanceStatus(str, Enum):
    """Attendance status stored on each log row."""

    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"
    EARLY_LEAVE = "early_leave"


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationCategory(str, Enum):
    ATTENDANCE = "attendance"
    SCHEDULE = "schedule"
    SYSTEM = "system"
    PROFILE = "profile"


class AnnouncementKind(str, Enum):
    SCHEDULE_CHANGE = "schedule_change"
    HOLIDAY = "holiday"
    MAINTENANCE = "maintenance"
    GENERAL = "general"
