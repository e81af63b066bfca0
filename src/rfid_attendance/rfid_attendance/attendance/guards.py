"""Checks run against persisted scans before anything is written."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import SCAN_RATE_LIMIT_SECONDS
from ..core.enums import Direction
from ..core.exceptions import DuplicateDirection, TooSoon
from .model import AttendanceLog


def resolve_direction(prior_scans_today: Sequence[AttendanceLog]) -> Direction:
    """Strict in -> out alternation per teacher, classroom and day."""

    directions = [log.scan_type for log in prior_scans_today]
    if not directions:
        return Direction.IN
    if directions == [Direction.IN]:
        return Direction.OUT
    raise DuplicateDirection("Already checked in and out of this class today.")


def check_rate_limit(
    last_scan_at: Optional[datetime],
    now: datetime,
    *,
    window_seconds: int = SCAN_RATE_LIMIT_SECONDS,
) -> None:
    if last_scan_at is None:
        return

    elapsed = (now - last_scan_at).total_seconds()
    if elapsed < window_seconds:
        retry_after = max(1, math.ceil(window_seconds - elapsed))
        raise TooSoon(
            f"Please wait at least {window_seconds} seconds between scans", retry_after_seconds=retry_after
        )
