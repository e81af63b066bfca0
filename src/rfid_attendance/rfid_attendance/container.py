from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceRecorder
from .classrooms.mysql_classroom_repository import MySQLClassroomRepository
from .core.settings import EngineSettings
from .database.connection import DBConfig, DatabaseConnection
from .notifications.auditor import IrregularityAuditor
from .notifications.broadcasts import BroadcastService
from .notifications.dispatcher import NotificationDispatcher
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.notifier import IrregularityNotifier
from .notifications.service import NotificationService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.resolver import ScheduleResolver
from .teachers.mysql_teacher_repository import MySQLTeacherRepository


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    recorder: AttendanceRecorder
    notifier: IrregularityNotifier
    auditor: IrregularityAuditor
    broadcasts: BroadcastService
    dispatcher: NotificationDispatcher


def build_container(*, db_config: dict, settings: Optional[EngineSettings] = None) -> Container:
    settings = settings or EngineSettings()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    teachers_repo = MySQLTeacherRepository(conn)
    classrooms_repo = MySQLClassroomRepository(conn)
    admins_repo = MySQLAdminRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn, default_grace_minutes=settings.default_grace_minutes)
    attendance_repo = MySQLAttendanceRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)

    dispatcher = NotificationDispatcher(
        ThreadPoolExecutor(max_workers=max(1, settings.notification_workers), thread_name_prefix="notify")
    )
    notification_service = NotificationService(notifications_repo)
    notifier = IrregularityNotifier(notification_service, admins_repo, settings=settings)

    recorder = AttendanceRecorder(
        attendance_repo,
        teachers_repo,
        classrooms_repo,
        ScheduleResolver(schedules_repo, strict=settings.strict_schedule_match),
        notifier=notifier,
        dispatcher=dispatcher,
        strategy_factory=AttendanceStrategyFactory(),
        settings=settings,
    )
    auditor = IrregularityAuditor(schedules_repo, attendance_repo, teachers_repo, classrooms_repo, notifier)
    broadcasts = BroadcastService(notification_service, schedules_repo, teachers_repo, classrooms_repo, admins_repo)

    return Container(
        settings=settings,
        recorder=recorder,
        notifier=notifier,
        auditor=auditor,
        broadcasts=broadcasts,
        dispatcher=dispatcher,
    )
