from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision
from .timing import minutes_between


class EarlyLeaveStrategy(AttendanceStrategy):
    """Check-out before the class ends."""

    def decide_checkin(self, *, scan_time: time, start_time: time, grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

    def decide_checkout(self, *, scan_time: time, end_time: time) -> StatusDecision:
        early_minutes = minutes_between(scan_time, end_time)
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, note=f"Left {early_minutes} minutes early")
