from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from ..attendance.model import AttendanceLog
from ..attendance.repository import AttendanceRepository
from ..classrooms.repository import ClassroomRepository
from ..common.datetime_utils import day_of_week, now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotificationFailure
from ..schedules.model import Schedule
from ..schedules.repository import ScheduleRepository
from ..teachers.repository import TeacherRepository
from .notifier import IrregularityNotifier

logger = logging.getLogger(__name__)

RECHECKED_STATUSES = (AttendanceStatus.LATE, AttendanceStatus.EARLY_LEAVE)


class IrregularityAuditor:
    """Sweep one day's schedules for no-shows and re-flag late / early-leave logs.

    Read-only over attendance logs. Running it twice sends the notices twice, so
    callers should not run it concurrently with itself.
    """

    def __init__(
        self,
        schedules: ScheduleRepository,
        attendance: AttendanceRepository,
        teachers: TeacherRepository,
        classrooms: ClassroomRepository,
        notifier: IrregularityNotifier,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._schedules = schedules
        self._attendance = attendance
        self._teachers = teachers
        self._classrooms = classrooms
        self._notifier = notifier
        self._clock = clock

    def audit_day(self, audit_date: date, *, now: Optional[datetime] = None) -> int:
        now = now or self._clock()
        if audit_date > now.date():
            return 0

        schedules = [s for s in self._schedules.list_active_for_day(day_of_week=day_of_week(audit_date)) if s.active]
        if not schedules:
            logger.info("No active schedules found for %s", audit_date)
            return 0

        teachers = {t.teacher_id: t for t in self._teachers.list_all() if t.is_active}
        classrooms = {c.classroom_id: c for c in self._classrooms.list_all()}
        logs = self._logs_by_slot(self._attendance.list_for_date(log_date=audit_date))

        found = 0
        for schedule in schedules:
            teacher = teachers.get(schedule.teacher_id)
            classroom = classrooms.get(schedule.classroom_id)
            if not teacher or not classroom:
                continue
            if not self._has_started(schedule, audit_date, now):
                continue

            slot_logs = logs.get((schedule.teacher_id, schedule.schedule_id), [])
            if not slot_logs:
                findings = [(AttendanceStatus.ABSENT, None)]
            else:
                findings = []
                for status in RECHECKED_STATUSES:
                    flagged = [log for log in slot_logs if log.status == status]
                    if flagged:
                        findings.append((status, flagged[0].scan_time))

            for status, scan_time in findings:
                found += 1
                try:
                    self._notifier.send_irregularity(
                        teacher=teacher,
                        classroom=classroom,
                        schedule=schedule,
                        status=status,
                        log_date=audit_date,
                        scan_time=scan_time,
                    )
                except NotificationFailure:
                    logger.exception("Could not notify %s for schedule %s", status.value, schedule.schedule_id)

        logger.info("Found and notified %s attendance irregularities for %s", found, audit_date)
        return found

    @staticmethod
    def _has_started(schedule: Schedule, audit_date: date, now: datetime) -> bool:
        if audit_date < now.date():
            return True
        return datetime.combine(audit_date, schedule.start_time) <= now

    @staticmethod
    def _logs_by_slot(logs: List[AttendanceLog]) -> Dict[Tuple[int, int], List[AttendanceLog]]:
        by_slot: Dict[Tuple[int, int], List[AttendanceLog]] = defaultdict(list)
        for log in logs:
            by_slot[(log.teacher_id, log.schedule_id)].append(log)
        return by_slot
