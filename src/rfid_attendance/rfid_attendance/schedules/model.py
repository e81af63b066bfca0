from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Schedule:
    """A weekly class slot: one teacher, one classroom, one day of week (Sunday=0)."""

    schedule_id: int
    teacher_id: int
    classroom_id: int
    day_of_week: int
    start_time: time
    end_time: time
    grace_period_minutes: int = 0
    subject: Optional[str] = None
    section: Optional[str] = None
    active: bool = True
