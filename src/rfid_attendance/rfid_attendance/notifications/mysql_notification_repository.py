from __future__ import annotations

from datetime import datetime

from ..core.enums import Role
from ..core.exceptions import NotificationFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, translate_errors
from .model import NotificationTemplate
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, user_role: Role, template: NotificationTemplate, created_at: datetime) -> int:
        with translate_errors(NotificationFailure, "Failed to create notification"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO notifications(user_id, user_role, title, message, type, category, is_read, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,0,%s)
                    """,
                    (
                        int(user_id),
                        user_role.value,
                        template.title,
                        template.message,
                        template.type.value,
                        template.category.value,
                        created_at,
                    ),
                )
                return int(cur.lastrowid)
