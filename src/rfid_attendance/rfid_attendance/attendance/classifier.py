"""Scan time + schedule window + grace period -> attendance status.

Pure functions: no storage, no clock. Times are compared at minute precision.
"""

from __future__ import annotations

from datetime import time
from typing import Optional

from ..common.datetime_utils import truncate_to_minute
from ..core.enums import AttendanceStatus, Direction
from .factory import AttendanceStrategyFactory
from .strategies.base import StatusDecision

_DEFAULT_FACTORY = AttendanceStrategyFactory()


def decide(
    direction: Direction,
    scan_time: time,
    schedule_start: time,
    schedule_end: time,
    grace_minutes: int,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    factory = factory or _DEFAULT_FACTORY
    scan_time = truncate_to_minute(scan_time)

    if direction == Direction.IN:
        strategy = factory.for_checkin(scan_time=scan_time, start_time=schedule_start, grace_minutes=grace_minutes)
        return strategy.decide_checkin(scan_time=scan_time, start_time=schedule_start, grace_minutes=grace_minutes)
    if direction == Direction.OUT:
        strategy = factory.for_checkout(scan_time=scan_time, end_time=schedule_end)
        return strategy.decide_checkout(scan_time=scan_time, end_time=schedule_end)
    raise ValueError(f"Unknown direction: {direction!r}")


def classify(
    direction: Direction,
    scan_time: time,
    schedule_start: time,
    schedule_end: time,
    grace_minutes: int,
) -> AttendanceStatus:
    return decide(direction, scan_time, schedule_start, schedule_end, grace_minutes).status
