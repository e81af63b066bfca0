from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, translate_errors
from .model import Classroom
from .repository import ClassroomRepository


class MySQLClassroomRepository(ClassroomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, classroom_id: int) -> Optional[Classroom]:
        with translate_errors(PersistenceFailure, "Failed to load classroom"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT classroom_id, name, location FROM classrooms WHERE classroom_id=%s",
                    (int(classroom_id),),
                )
                r = fetchone(cur)
                if not r:
                    return None
                return Classroom(classroom_id=int(r["classroom_id"]), name=r["name"], location=r.get("location") or "")

    def list_all(self) -> Sequence[Classroom]:
        with translate_errors(PersistenceFailure, "Failed to list classrooms"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT classroom_id, name, location FROM classrooms ORDER BY classroom_id")
                return [
                    Classroom(classroom_id=int(r["classroom_id"]), name=r["name"], location=r.get("location") or "")
                    for r in fetchall(cur)
                ]
