from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.exceptions import PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time, translate_errors
from .model import Schedule
from .repository import ScheduleRepository

_COLUMNS = """
    schedule_id, teacher_id, classroom_id, day_of_week, start_time, end_time,
    grace_period_minutes, subject, section, active
"""


def _to_schedule(r: Dict[str, Any], default_grace_minutes: int) -> Schedule:
    grace = r.get("grace_period_minutes")
    return Schedule(
        schedule_id=int(r["schedule_id"]),
        teacher_id=int(r["teacher_id"]),
        classroom_id=int(r["classroom_id"]),
        day_of_week=int(r["day_of_week"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        grace_period_minutes=default_grace_minutes if grace is None else int(grace),
        subject=r.get("subject"),
        section=r.get("section"),
        active=bool(r.get("active", 1)),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_grace_minutes: int = DEFAULT_GRACE_MINUTES):
        self._conn_factory = conn_factory
        self._default_grace = int(default_grace_minutes)

    def list_for(self, *, teacher_id: int, classroom_id: int, day_of_week: int) -> Sequence[Schedule]:
        with translate_errors(PersistenceFailure, "Failed to load schedules"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM schedules
                    WHERE teacher_id=%s AND classroom_id=%s AND day_of_week=%s AND active=1
                    ORDER BY start_time ASC, schedule_id ASC
                    """,
                    (int(teacher_id), int(classroom_id), int(day_of_week)),
                )
                return [_to_schedule(r, self._default_grace) for r in fetchall(cur)]

    def list_active_for_day(self, *, day_of_week: int) -> Sequence[Schedule]:
        with translate_errors(PersistenceFailure, "Failed to load schedules"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM schedules
                    WHERE day_of_week=%s AND active=1
                    ORDER BY start_time ASC, schedule_id ASC
                    """,
                    (int(day_of_week),),
                )
                return [_to_schedule(r, self._default_grace) for r in fetchall(cur)]
