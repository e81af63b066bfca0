from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..admins.repository import AdminRepository
from ..classrooms.repository import ClassroomRepository
from ..common.datetime_utils import day_of_week, format_12h, now_local
from ..common.validators import require_non_empty
from ..core.constants import IMMINENT_REMINDER_MINUTES, REMINDER_LEAD_MINUTES
from ..core.enums import AnnouncementKind, Role
from ..schedules.repository import ScheduleRepository
from ..teachers.repository import TeacherRepository
from . import templates
from .service import NotificationService

logger = logging.getLogger(__name__)


class BroadcastService:
    """Class reminders and system-wide announcements."""

    def __init__(
        self,
        notifications: NotificationService,
        schedules: ScheduleRepository,
        teachers: TeacherRepository,
        classrooms: ClassroomRepository,
        admins: AdminRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._notifications = notifications
        self._schedules = schedules
        self._teachers = teachers
        self._classrooms = classrooms
        self._admins = admins
        self._clock = clock

    def send_daily_reminders(self, *, now: Optional[datetime] = None) -> int:
        """Remind teachers whose class starts in exactly 30 or 15 minutes.

        Meant to be triggered once a minute by an external scheduler.
        """

        now = now or self._clock()
        today = now.date()
        schedules = self._schedules.list_active_for_day(day_of_week=day_of_week(today))
        if not schedules:
            logger.info("No active schedules found for today")
            return 0

        teachers = {t.teacher_id: t for t in self._teachers.list_all() if t.is_active}
        classrooms = {c.classroom_id: c for c in self._classrooms.list_all()}

        sent = 0
        for schedule in schedules:
            teacher = teachers.get(schedule.teacher_id)
            classroom = classrooms.get(schedule.classroom_id)
            if not teacher or not classroom:
                continue

            starts_at = datetime.combine(today, schedule.start_time)
            minutes_until = int((starts_at - now).total_seconds() // 60)
            if minutes_until not in REMINDER_LEAD_MINUTES:
                continue

            template = templates.class_reminder(
                class_name=classroom.name,
                class_time=format_12h(schedule.start_time),
                location=classroom.location,
                minutes_until=minutes_until,
                imminent_minutes=IMMINENT_REMINDER_MINUTES,
            )
            self._notifications.create(user_id=teacher.teacher_id, user_role=Role.TEACHER, template=template)
            logger.info("Class reminder sent to %s", teacher.name)
            sent += 1

        logger.info("Sent %s class reminders", sent)
        return sent

    def send_system_announcement(
        self,
        *,
        title: str,
        message: str,
        kind: AnnouncementKind = AnnouncementKind.GENERAL,
        target_role: Optional[Role] = None,
        urgent: bool = False,
    ) -> int:
        """Send to one role, or to everyone when `target_role` is None."""

        template = templates.system_announcement(
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            kind=kind,
            urgent=urgent,
        )

        sent = 0
        if target_role in (None, Role.TEACHER):
            teacher_ids = [t.teacher_id for t in self._teachers.list_all() if t.is_active]
            sent += self._notifications.send_bulk(teacher_ids, Role.TEACHER, template)
        if target_role in (None, Role.ADMIN):
            sent += self._notifications.send_bulk(self._admins.list_ids(), Role.ADMIN, template)

        logger.info("System announcement sent: %s (%s recipients)", title, sent)
        return sent
