from __future__ import annotations

from typing import Sequence

from ..core.exceptions import NotificationFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, translate_errors
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_ids(self) -> Sequence[int]:
        # Only ever read to fan out notifications.
        with translate_errors(NotificationFailure, "Failed to list admins"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT admin_id FROM admins WHERE is_active=1 ORDER BY admin_id")
                return [int(r["admin_id"]) for r in fetchall(cur)]
