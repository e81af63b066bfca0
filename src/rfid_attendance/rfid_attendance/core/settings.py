from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import DEFAULT_GRACE_MINUTES, DEFAULT_NOTIFICATION_WORKERS, SCAN_RATE_LIMIT_SECONDS


@dataclass(frozen=True)
class EngineSettings:
    """Attendance and notification settings shared by the services."""

    rate_limit_seconds: int = SCAN_RATE_LIMIT_SECONDS
    default_grace_minutes: int = DEFAULT_GRACE_MINUTES
    notify_admins_on_irregularity: bool = False
    strict_schedule_match: bool = False
    late_arrival_alerts: bool = True
    absence_alerts: bool = True
    notification_workers: int = DEFAULT_NOTIFICATION_WORKERS

    @classmethod
    def from_module(cls, settings: Any) -> "EngineSettings":
        """Build from a `config.<env>` settings module; missing names keep defaults."""

        defaults = cls()
        return cls(
            rate_limit_seconds=int(getattr(settings, "SCAN_RATE_LIMIT_SECONDS", defaults.rate_limit_seconds)),
            default_grace_minutes=int(getattr(settings, "DEFAULT_GRACE_MINUTES", defaults.default_grace_minutes)),
            notify_admins_on_irregularity=bool(
                getattr(settings, "NOTIFY_ADMINS_ON_IRREGULARITY", defaults.notify_admins_on_irregularity)
            ),
            strict_schedule_match=bool(getattr(settings, "STRICT_SCHEDULE_MATCH", defaults.strict_schedule_match)),
            late_arrival_alerts=bool(getattr(settings, "LATE_ARRIVAL_ALERTS", defaults.late_arrival_alerts)),
            absence_alerts=bool(getattr(settings, "ABSENCE_ALERTS", defaults.absence_alerts)),
            notification_workers=int(getattr(settings, "NOTIFICATION_WORKERS", defaults.notification_workers)),
        )
