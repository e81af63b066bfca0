from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus, Direction
from ..core.exceptions import PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, translate_errors
from .model import AttendanceLog
from .repository import AttendanceRepository

_COLUMNS = "log_id, teacher_id, classroom_id, schedule_id, log_date, scan_time, scan_type, status, created_at"


def _to_log(r: Dict[str, Any]) -> AttendanceLog:
    return AttendanceLog(
        log_id=int(r["log_id"]),
        teacher_id=int(r["teacher_id"]),
        classroom_id=int(r["classroom_id"]),
        schedule_id=int(r["schedule_id"]),
        log_date=r["log_date"],
        scan_time=normalize_mysql_time(r["scan_time"]),
        scan_type=Direction(r["scan_type"]),
        status=AttendanceStatus(r["status"]),
        created_at=r["created_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teacher_classroom_date(
        self, *, teacher_id: int, classroom_id: int, log_date: date
    ) -> Sequence[AttendanceLog]:
        with translate_errors(PersistenceFailure, "Failed to load today's scans"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_logs
                    WHERE teacher_id=%s AND classroom_id=%s AND log_date=%s
                    ORDER BY created_at ASC, log_id ASC
                    """,
                    (int(teacher_id), int(classroom_id), log_date),
                )
                return [_to_log(r) for r in fetchall(cur)]

    def latest_scan_at(self, *, teacher_id: int, classroom_id: int) -> Optional[datetime]:
        with translate_errors(PersistenceFailure, "Failed to load the last scan"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT MAX(created_at) AS last_scan FROM attendance_logs WHERE teacher_id=%s AND classroom_id=%s",
                    (int(teacher_id), int(classroom_id)),
                )
                r = fetchone(cur)
                return r["last_scan"] if r else None

    def list_for_date(self, *, log_date: date) -> Sequence[AttendanceLog]:
        with translate_errors(PersistenceFailure, "Failed to load attendance logs"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_logs
                    WHERE log_date=%s
                    ORDER BY created_at ASC, log_id ASC
                    """,
                    (log_date,),
                )
                return [_to_log(r) for r in fetchall(cur)]

    def create_log(
        self,
        *,
        teacher_id: int,
        classroom_id: int,
        schedule_id: int,
        log_date: date,
        scan_time: time,
        scan_type: Direction,
        status: AttendanceStatus,
        created_at: datetime,
    ) -> int:
        with translate_errors(PersistenceFailure, "Failed to record attendance"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_logs(
                        teacher_id, classroom_id, schedule_id, log_date, scan_time, scan_type, status, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(teacher_id),
                        int(classroom_id),
                        int(schedule_id),
                        log_date,
                        scan_time,
                        scan_type.value,
                        status.value,
                        created_at,
                    ),
                )
                return int(cur.lastrowid)
