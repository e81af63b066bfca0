from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..classrooms.model import Classroom
from ..core.enums import AttendanceStatus, Direction
from ..schedules.model import Schedule
from ..teachers.model import Teacher


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one accepted badge scan. Append-only."""

    log_id: int
    teacher_id: int
    classroom_id: int
    schedule_id: int
    log_date: date
    scan_time: time
    scan_type: Direction
    status: AttendanceStatus
    created_at: datetime


@dataclass(frozen=True)
class AttendanceResult:
    """What the scanner shows after a scan is recorded."""

    log: AttendanceLog
    teacher: Teacher
    classroom: Classroom
    schedule: Schedule
    note: Optional[str] = None

    @property
    def direction(self) -> Direction:
        return self.log.scan_type

    @property
    def status(self) -> AttendanceStatus:
        return self.log.status
