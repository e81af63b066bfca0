from datetime import datetime

import pytest

from src.rfid_attendance.rfid_attendance.core.enums import AnnouncementKind, NotificationType, Role
from src.rfid_attendance.rfid_attendance.core.exceptions import ValidationError


def test_reminder_thirty_minutes_before_uses_class_time(world):
    sent = world.broadcasts.send_daily_reminders(now=datetime(2026, 2, 2, 7, 30))

    assert sent == 1
    (notice,) = world.notifications.created
    assert notice["user_id"] == 1
    assert notice["template"].message == "Reminder: You are scheduled to teach at 8:00 AM in Room 101 at Main Building."


def test_reminder_fifteen_minutes_before_counts_down(world):
    world.broadcasts.send_daily_reminders(now=datetime(2026, 2, 2, 7, 45))

    (notice,) = world.notifications.created
    assert notice["template"].message == "Reminder: You are scheduled to teach in 15 minutes in Room 101 at Main Building."


@pytest.mark.parametrize("minute", [0, 29, 31, 50])
def test_no_reminder_outside_lead_times(world, minute):
    assert world.broadcasts.send_daily_reminders(now=datetime(2026, 2, 2, 7, minute)) == 0


def test_no_reminders_on_a_day_without_classes(world):
    assert world.broadcasts.send_daily_reminders(now=datetime(2026, 2, 3, 7, 30)) == 0


def test_announcement_to_everyone(world):
    sent = world.broadcasts.send_system_announcement(title="Campus closed", message="Typhoon warning", urgent=True)

    assert sent == 3
    template = world.notifications.created[0]["template"]
    assert template.title == "📢 Campus closed"
    assert template.type == NotificationType.WARNING


def test_announcement_to_one_role(world):
    sent = world.broadcasts.send_system_announcement(
        title="Holiday",
        message="No classes on Friday",
        kind=AnnouncementKind.HOLIDAY,
        target_role=Role.TEACHER,
    )

    assert sent == 1
    (notice,) = world.notifications.created
    assert notice["user_role"] == Role.TEACHER
    assert notice["template"].title == "🎉 Holiday"
    assert notice["template"].type == NotificationType.INFO


def test_announcement_requires_title_and_message(world):
    with pytest.raises(ValidationError):
        world.broadcasts.send_system_announcement(title="  ", message="x")
    with pytest.raises(ValidationError):
        world.broadcasts.send_system_announcement(title="x", message="")
    assert world.notifications.created == []
