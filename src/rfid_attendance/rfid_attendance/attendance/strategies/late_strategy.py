from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision
from .timing import minutes_between


class LateStrategy(AttendanceStrategy):
    """Check-in after the grace period."""

    def decide_checkin(self, *, scan_time: time, start_time: time, grace_minutes: int) -> StatusDecision:
        late_minutes = minutes_between(start_time, scan_time)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {late_minutes} minutes")

    def decide_checkout(self, *, scan_time: time, end_time: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
