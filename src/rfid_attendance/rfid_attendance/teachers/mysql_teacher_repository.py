from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_errors
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "teacher_id, name, rfid_id, teacher_code, is_active"


def _to_teacher(r: Dict[str, Any]) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        rfid_id=r["rfid_id"],
        teacher_code=r.get("teacher_code"),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_rfid(self, rfid_id: str) -> Optional[Teacher]:
        with translate_errors(PersistenceFailure, "Failed to look up badge"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM teachers
                    WHERE rfid_id=%s AND is_active=1
                    ORDER BY teacher_id
                    LIMIT 1
                    """,
                    (rfid_id,),
                )
                r = fetchone(cur)
                return _to_teacher(r) if r else None

    def list_all(self) -> Sequence[Teacher]:
        with translate_errors(PersistenceFailure, "Failed to list teachers"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY teacher_id")
                return [_to_teacher(r) for r in fetchall(cur)]
