from __future__ import annotations

from datetime import datetime
from typing import Protocol

from ..core.enums import Role
from .model import NotificationTemplate


class NotificationRepository(Protocol):
    def create(self, *, user_id: int, user_role: Role, template: NotificationTemplate, created_at: datetime) -> int:
        """Store an unread notification and return its id.

        Raises NotificationFailure when the write fails.
        """

        raise NotImplementedError
