from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence

from ..admins.repository import AdminRepository
from ..attendance.model import AttendanceResult
from ..classrooms.model import Classroom
from ..common.datetime_utils import format_12h
from ..core.enums import AttendanceStatus, Direction, Role
from ..core.exceptions import NotificationFailure
from ..core.settings import EngineSettings
from ..schedules.model import Schedule
from ..teachers.model import Teacher
from . import templates
from .model import NotificationTemplate
from .service import NotificationService

logger = logging.getLogger(__name__)

IRREGULAR_ON_CHECKIN = frozenset({AttendanceStatus.LATE, AttendanceStatus.ABSENT})
IRREGULAR_ON_CHECKOUT = frozenset({AttendanceStatus.EARLY_LEAVE})


def is_irregular(direction: Direction, status: AttendanceStatus) -> bool:
    if direction == Direction.IN:
        return status in IRREGULAR_ON_CHECKIN
    if direction == Direction.OUT:
        return status in IRREGULAR_ON_CHECKOUT
    raise ValueError(f"Unknown direction: {direction!r}")


class IrregularityNotifier:
    """Turns recorded scans (and audit findings) into notifications.

    Two kinds go out:
    - irregularity notices (late / absent / early leave) to the teacher, and to every
      admin when `notify_admins_on_irregularity` is set;
    - a "teacher action" audit notice to every admin for each recorded scan.
    """

    def __init__(
        self,
        notifications: NotificationService,
        admins: AdminRepository,
        *,
        settings: Optional[EngineSettings] = None,
    ):
        self._notifications = notifications
        self._admins = admins
        self._settings = settings or EngineSettings()

    def notify_if_irregular(self, result: AttendanceResult) -> int:
        if not is_irregular(result.direction, result.status):
            return 0
        return self.send_irregularity(
            teacher=result.teacher,
            classroom=result.classroom,
            schedule=result.schedule,
            status=result.status,
            log_date=result.log.log_date,
            scan_time=result.log.scan_time,
        )

    def send_irregularity(
        self,
        *,
        teacher: Teacher,
        classroom: Classroom,
        schedule: Schedule,
        status: AttendanceStatus,
        log_date: date,
        scan_time: Optional[time] = None,
    ) -> int:
        """Returns how many notifications were created (0 when alerts for `status` are off)."""

        if not self._alerts_enabled(status):
            logger.info("%s alerts disabled; skipping teacher=%s", status.value, teacher.teacher_id)
            return 0

        class_time = format_12h(schedule.start_time)
        template = templates.attendance_irregularity(
            teacher_name=teacher.name,
            class_name=classroom.name,
            class_time=class_time,
            status=status,
            date_str=log_date.isoformat(),
        )
        sent = self._notifications.send_bulk([teacher.teacher_id], Role.TEACHER, template)
        logger.info("Irregularity %s sent for %s on %s", status.value, teacher.name, log_date)

        if self._settings.notify_admins_on_irregularity:
            admin_template = self._admin_template(template, teacher, classroom, status, scan_time or schedule.start_time)
            sent += self._notifications.send_bulk(self._admin_ids(), Role.ADMIN, admin_template)
        return sent

    def send_teacher_action(self, result: AttendanceResult) -> int:
        admin_ids = self._admin_ids()
        if not admin_ids:
            logger.info("No admins found to notify")
            return 0

        action = "Checked In" if result.direction == Direction.IN else "Checked Out"
        template = templates.teacher_action(
            teacher_name=result.teacher.name,
            action=action,
            details=f"{result.status.value} at {result.classroom.name}",
            at=format_12h(result.log.scan_time),
        )
        sent = self._notifications.send_bulk(admin_ids, Role.ADMIN, template)
        logger.info("Teacher action notification sent to admins for %s's %s", result.teacher.name, action)
        return sent

    def _alerts_enabled(self, status: AttendanceStatus) -> bool:
        if status == AttendanceStatus.LATE:
            return self._settings.late_arrival_alerts
        if status == AttendanceStatus.ABSENT:
            return self._settings.absence_alerts
        return True

    def _admin_ids(self) -> Sequence[int]:
        try:
            return list(self._admins.list_ids())
        except NotificationFailure:
            logger.warning("Could not list admins; skipping admin notifications", exc_info=True)
            return []

    @staticmethod
    def _admin_template(
        teacher_template: NotificationTemplate,
        teacher: Teacher,
        classroom: Classroom,
        status: AttendanceStatus,
        at: time,
    ) -> NotificationTemplate:
        if status == AttendanceStatus.LATE:
            return templates.late_arrival(teacher_name=teacher.name, class_name=classroom.name, at=format_12h(at))
        if status == AttendanceStatus.ABSENT:
            return templates.absence(teacher_name=teacher.name, class_name=classroom.name)
        return teacher_template
