from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable

from ..common.datetime_utils import now_local
from ..core.enums import Role
from .model import NotificationTemplate
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Creates notification rows. Delivery and read-state belong to the notification center."""

    def __init__(self, notifications: NotificationRepository, *, clock: Callable[[], datetime] = now_local):
        self._notifications = notifications
        self._clock = clock

    def create(self, *, user_id: int, user_role: Role, template: NotificationTemplate) -> int:
        return self._notifications.create(
            user_id=int(user_id),
            user_role=user_role,
            template=template,
            created_at=self._clock(),
        )

    def send_bulk(self, user_ids: Iterable[int], user_role: Role, template: NotificationTemplate) -> int:
        """One notification per recipient. An empty recipient list is a no-op."""

        sent = 0
        for user_id in user_ids:
            self.create(user_id=user_id, user_role=user_role, template=template)
            sent += 1
        if not sent:
            logger.info("No %s recipients for %r", user_role.value, template.title)
        return sent
