from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta

from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.timing import on_reference_date


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, scan_time: time, start_time: time, grace_minutes: int) -> AttendanceStrategy:
        deadline = on_reference_date(start_time) + timedelta(minutes=max(0, int(grace_minutes)))
        if on_reference_date(scan_time) <= deadline:
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, scan_time: time, end_time: time) -> AttendanceStrategy:
        if on_reference_date(scan_time) < on_reference_date(end_time):
            return EarlyLeaveStrategy()
        return NormalStrategy()
