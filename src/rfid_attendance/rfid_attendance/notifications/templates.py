"""Notification wording. Each builder returns a recipient-less template."""

from __future__ import annotations

from ..core.enums import AnnouncementKind, AttendanceStatus, NotificationCategory, NotificationType
from .model import NotificationTemplate

IRREGULARITY_PHRASES = {
    AttendanceStatus.LATE: "arrived late to",
    AttendanceStatus.ABSENT: "was absent from",
    AttendanceStatus.EARLY_LEAVE: "left early from",
}

ANNOUNCEMENT_ICONS = {
    AnnouncementKind.SCHEDULE_CHANGE: "📅",
    AnnouncementKind.HOLIDAY: "🎉",
    AnnouncementKind.MAINTENANCE: "🔧",
    AnnouncementKind.GENERAL: "📢",
}


def attendance_irregularity(
    *, teacher_name: str, class_name: str, class_time: str, status: AttendanceStatus, date_str: str
) -> NotificationTemplate:
    phrase = IRREGULARITY_PHRASES.get(status)
    if phrase is None:
        raise ValueError(f"{status.value} is not an irregularity")
    return NotificationTemplate(
        title="Attendance Irregularity",
        message=f"{teacher_name} {phrase} {class_name} class scheduled for {class_time} on {date_str}.",
        type=NotificationType.WARNING,
        category=NotificationCategory.ATTENDANCE,
    )


def teacher_action(*, teacher_name: str, action: str, details: str, at: str) -> NotificationTemplate:
    return NotificationTemplate(
        title=f"👨‍🏫 Teacher Action: {action}",
        message=f"{teacher_name} {action} - {details} at {at}",
        type=NotificationType.INFO,
        category=NotificationCategory.SYSTEM,
    )


def class_reminder(*, class_name: str, class_time: str, location: str, minutes_until: int, imminent_minutes: int) -> NotificationTemplate:
    when = f"in {minutes_until} minutes" if minutes_until <= imminent_minutes else f"at {class_time}"
    return NotificationTemplate(
        title="Class Reminder",
        message=f"Reminder: You are scheduled to teach {when} in {class_name} at {location}.",
        type=NotificationType.INFO,
        category=NotificationCategory.SCHEDULE,
    )


def late_arrival(*, teacher_name: str, class_name: str, at: str) -> NotificationTemplate:
    return NotificationTemplate(
        title="Late Arrival Alert",
        message=f"{teacher_name} arrived late to {class_name} at {at}",
        type=NotificationType.WARNING,
        category=NotificationCategory.ATTENDANCE,
    )


def absence(*, teacher_name: str, class_name: str) -> NotificationTemplate:
    return NotificationTemplate(
        title="Absence Alert",
        message=f"{teacher_name} is marked absent for {class_name}",
        type=NotificationType.ERROR,
        category=NotificationCategory.ATTENDANCE,
    )


def system_announcement(*, title: str, message: str, kind: AnnouncementKind, urgent: bool = False) -> NotificationTemplate:
    return NotificationTemplate(
        title=f"{ANNOUNCEMENT_ICONS[kind]} {title}",
        message=message,
        type=NotificationType.WARNING if urgent else NotificationType.INFO,
        category=NotificationCategory.SYSTEM,
    )
