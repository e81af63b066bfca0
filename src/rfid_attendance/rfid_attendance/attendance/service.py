from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from ..classrooms.repository import ClassroomRepository
from ..common.datetime_utils import day_of_week, now_local, truncate_to_minute
from ..common.validators import require_badge_id
from ..core.exceptions import ScanRejected, UnknownBadge, UnknownClassroom
from ..core.settings import EngineSettings
from ..notifications.dispatcher import NotificationDispatcher
from ..notifications.notifier import IrregularityNotifier
from ..schedules.resolver import ScheduleResolver
from ..teachers.repository import TeacherRepository
from . import classifier
from .factory import AttendanceStrategyFactory
from .guards import check_rate_limit, resolve_direction
from .model import AttendanceLog, AttendanceResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class _KeyedLocks:
    """One lock per (teacher, classroom) so scans for the same pair run one at a time."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[int, int], threading.Lock] = {}

    def get(self, key: Tuple[int, int]) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


class AttendanceRecorder:
    """Badge scan -> one AttendanceLog, or a specific ScanRejected and nothing written.

    Steps: badge format, teacher, classroom, schedule, rate limit, direction,
    classify, persist. Notifications are handed to the dispatcher after the write
    and can never fail the scan.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherRepository,
        classrooms: ClassroomRepository,
        resolver: ScheduleResolver,
        *,
        notifier: Optional[IrregularityNotifier] = None,
        dispatcher: Optional[NotificationDispatcher] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        settings: Optional[EngineSettings] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._classrooms = classrooms
        self._resolver = resolver
        self._notifier = notifier
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._settings = settings or EngineSettings()
        self._clock = clock
        self._locks = _KeyedLocks()

    def record_scan(self, badge_id: str, classroom_id: int, *, now: Optional[datetime] = None) -> AttendanceResult:
        now = now or self._clock()
        try:
            result = self._record(require_badge_id(badge_id), int(classroom_id), now)
        except ScanRejected as e:
            logger.info("Scan rejected badge=%r classroom=%s: %s (%s)", badge_id, classroom_id, e, e.code)
            raise

        logger.info(
            "Recorded %s %s for teacher=%s classroom=%s schedule=%s",
            result.direction.value,
            result.status.value,
            result.teacher.teacher_id,
            result.classroom.classroom_id,
            result.schedule.schedule_id,
        )
        self._dispatch_notifications(result)
        return result

    def _record(self, badge: str, classroom_id: int, now: datetime) -> AttendanceResult:
        teacher = self._teachers.get_by_rfid(badge)
        if not teacher:
            raise UnknownBadge("RFID card not recognized. Please register this card first.")

        classroom = self._classrooms.get_by_id(classroom_id)
        if not classroom:
            raise UnknownClassroom("Please select a valid classroom first.")

        today = now.date()
        schedule = self._resolver.resolve(
            teacher_id=teacher.teacher_id,
            classroom_id=classroom.classroom_id,
            day_of_week=day_of_week(today),
        )

        with self._locks.get((teacher.teacher_id, classroom.classroom_id)):
            prior = self._attendance.list_for_teacher_classroom_date(
                teacher_id=teacher.teacher_id,
                classroom_id=classroom.classroom_id,
                log_date=today,
            )
            last_scan_at = self._attendance.latest_scan_at(
                teacher_id=teacher.teacher_id,
                classroom_id=classroom.classroom_id,
            )
            check_rate_limit(last_scan_at, now, window_seconds=self._settings.rate_limit_seconds)
            direction = resolve_direction(prior)

            scan_time = truncate_to_minute(now.time())
            decision = classifier.decide(
                direction,
                scan_time,
                schedule.start_time,
                schedule.end_time,
                schedule.grace_period_minutes,
                factory=self._factory,
            )

            log_id = self._attendance.create_log(
                teacher_id=teacher.teacher_id,
                classroom_id=classroom.classroom_id,
                schedule_id=schedule.schedule_id,
                log_date=today,
                scan_time=scan_time,
                scan_type=direction,
                status=decision.status,
                created_at=now,
            )

        log = AttendanceLog(
            log_id=log_id,
            teacher_id=teacher.teacher_id,
            classroom_id=classroom.classroom_id,
            schedule_id=schedule.schedule_id,
            log_date=today,
            scan_time=scan_time,
            scan_type=direction,
            status=decision.status,
            created_at=now,
        )
        return AttendanceResult(log=log, teacher=teacher, classroom=classroom, schedule=schedule, note=decision.note)

    def _dispatch_notifications(self, result: AttendanceResult) -> None:
        if self._notifier is None:
            return
        self._dispatcher.submit(self._notifier.send_teacher_action, result)
        self._dispatcher.submit(self._notifier.notify_if_irregular, result)
