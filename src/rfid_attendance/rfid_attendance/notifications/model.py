from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import NotificationCategory, NotificationType


@dataclass(frozen=True)
class NotificationTemplate:
    """Everything about a notification except who receives it.

    The repository adds user_id, user_role, is_read=0 and created_at.
    """

    title: str
    message: str
    type: NotificationType
    category: NotificationCategory
