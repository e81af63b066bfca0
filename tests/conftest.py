from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from types import SimpleNamespace
from typing import Optional

import pytest

from src.rfid_attendance.rfid_attendance.attendance.model import AttendanceLog
from src.rfid_attendance.rfid_attendance.attendance.service import AttendanceRecorder
from src.rfid_attendance.rfid_attendance.classrooms.model import Classroom
from src.rfid_attendance.rfid_attendance.core.enums import AttendanceStatus, Direction, Role
from src.rfid_attendance.rfid_attendance.core.exceptions import NotificationFailure, PersistenceFailure
from src.rfid_attendance.rfid_attendance.core.settings import EngineSettings
from src.rfid_attendance.rfid_attendance.notifications.auditor import IrregularityAuditor
from src.rfid_attendance.rfid_attendance.notifications.broadcasts import BroadcastService
from src.rfid_attendance.rfid_attendance.notifications.notifier import IrregularityNotifier
from src.rfid_attendance.rfid_attendance.notifications.service import NotificationService
from src.rfid_attendance.rfid_attendance.schedules.model import Schedule
from src.rfid_attendance.rfid_attendance.schedules.resolver import ScheduleResolver
from src.rfid_attendance.rfid_attendance.teachers.model import Teacher

# 2026-02-02 is a Monday (day_of_week=1 with Sunday=0).
MONDAY = date(2026, 2, 2)


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryTeachers:
    def __init__(self, teachers):
        self.teachers = list(teachers)
        self.rfid_lookups = 0

    def get_by_rfid(self, rfid_id: str) -> Optional[Teacher]:
        self.rfid_lookups += 1
        return next((t for t in self.teachers if t.rfid_id == rfid_id and t.is_active), None)

    def list_all(self):
        return list(self.teachers)


class InMemoryClassrooms:
    def __init__(self, classrooms):
        self.classrooms = {c.classroom_id: c for c in classrooms}

    def get_by_id(self, classroom_id: int) -> Optional[Classroom]:
        return self.classrooms.get(classroom_id)

    def list_all(self):
        return list(self.classrooms.values())


@dataclass
class InMemoryAdmins:
    ids: list = field(default_factory=list)
    broken: bool = False

    def list_ids(self):
        if self.broken:
            raise NotificationFailure("admins unavailable")
        return list(self.ids)


class InMemorySchedules:
    def __init__(self, schedules):
        self.schedules = list(schedules)

    def list_for(self, *, teacher_id: int, classroom_id: int, day_of_week: int):
        return [
            s
            for s in self.schedules
            if s.teacher_id == teacher_id and s.classroom_id == classroom_id and s.day_of_week == day_of_week
        ]

    def list_active_for_day(self, *, day_of_week: int):
        return [s for s in self.schedules if s.day_of_week == day_of_week and s.active]


class InMemoryAttendance:
    def __init__(self):
        self.logs: list[AttendanceLog] = []
        self.fail_writes = False

    def list_for_teacher_classroom_date(self, *, teacher_id: int, classroom_id: int, log_date: date):
        rows = [
            log
            for log in self.logs
            if log.teacher_id == teacher_id and log.classroom_id == classroom_id and log.log_date == log_date
        ]
        return sorted(rows, key=lambda log: log.created_at)

    def latest_scan_at(self, *, teacher_id: int, classroom_id: int) -> Optional[datetime]:
        rows = [log.created_at for log in self.logs if log.teacher_id == teacher_id and log.classroom_id == classroom_id]
        return max(rows, default=None)

    def list_for_date(self, *, log_date: date):
        return [log for log in self.logs if log.log_date == log_date]

    def create_log(self, *, teacher_id, classroom_id, schedule_id, log_date, scan_time, scan_type, status, created_at) -> int:
        if self.fail_writes:
            raise PersistenceFailure("Failed to record attendance: connection lost")
        log_id = len(self.logs) + 1
        self.logs.append(
            AttendanceLog(
                log_id=log_id,
                teacher_id=teacher_id,
                classroom_id=classroom_id,
                schedule_id=schedule_id,
                log_date=log_date,
                scan_time=scan_time,
                scan_type=scan_type,
                status=status,
                created_at=created_at,
            )
        )
        return log_id

    def add(self, *, scan_type: Direction, status: AttendanceStatus, created_at: datetime, teacher_id=1, classroom_id=1, schedule_id=10):
        """Seed a log as if another scanner terminal had written it."""

        return self.create_log(
            teacher_id=teacher_id,
            classroom_id=classroom_id,
            schedule_id=schedule_id,
            log_date=created_at.date(),
            scan_time=created_at.time().replace(second=0, microsecond=0),
            scan_type=scan_type,
            status=status,
            created_at=created_at,
        )


class InMemoryNotifications:
    def __init__(self):
        self.created: list[dict] = []
        self.fail = False

    def create(self, *, user_id, user_role, template, created_at) -> int:
        if self.fail:
            raise NotificationFailure("Failed to create notification: backend down")
        self.created.append({"user_id": user_id, "user_role": user_role, "template": template, "created_at": created_at})
        return len(self.created)

    def for_role(self, role: Role):
        return [n for n in self.created if n["user_role"] == role]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 5, 0)


@pytest.fixture
def make_world(fixed_now):
    """Build the whole engine over in-memory repositories with inline notifications."""

    def _make(*, admin_ids=(100, 101), schedules=None, **settings_overrides):
        teacher = Teacher(teacher_id=1, name="Maria Santos", rfid_id="1234567890", teacher_code="2022-280")
        classroom = Classroom(classroom_id=1, name="Room 101", location="Main Building")
        schedule = Schedule(
            schedule_id=10,
            teacher_id=1,
            classroom_id=1,
            day_of_week=1,
            start_time=time(8, 0),
            end_time=time(9, 30),
            grace_period_minutes=10,
            subject="Mathematics",
        )
        settings = EngineSettings(**settings_overrides)
        clock = FixedClock(fixed_now)

        teachers = InMemoryTeachers([teacher])
        classrooms = InMemoryClassrooms([classroom])
        admins = InMemoryAdmins(list(admin_ids))
        schedules_repo = InMemorySchedules([schedule] if schedules is None else schedules)
        attendance = InMemoryAttendance()
        notifications = InMemoryNotifications()

        notification_service = NotificationService(notifications, clock=clock)
        notifier = IrregularityNotifier(notification_service, admins, settings=settings)
        recorder = AttendanceRecorder(
            attendance,
            teachers,
            classrooms,
            ScheduleResolver(schedules_repo, strict=settings.strict_schedule_match),
            notifier=notifier,
            settings=settings,
            clock=clock,
        )
        auditor = IrregularityAuditor(schedules_repo, attendance, teachers, classrooms, notifier, clock=clock)
        broadcasts = BroadcastService(notification_service, schedules_repo, teachers, classrooms, admins, clock=clock)

        return SimpleNamespace(
            teacher=teacher,
            classroom=classroom,
            schedule=schedule,
            settings=settings,
            clock=clock,
            teachers=teachers,
            classrooms=classrooms,
            admins=admins,
            schedules=schedules_repo,
            attendance=attendance,
            notifications=notifications,
            notification_service=notification_service,
            notifier=notifier,
            recorder=recorder,
            auditor=auditor,
            broadcasts=broadcasts,
        )

    return _make


@pytest.fixture
def world(make_world):
    return make_world()
