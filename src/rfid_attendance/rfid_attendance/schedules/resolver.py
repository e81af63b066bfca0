from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..core.exceptions import AmbiguousSchedule, NoScheduleToday
from .model import Schedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleResolver:
    """Find the one schedule a scan belongs to.

    Several classes on the same teacher/classroom/day are valid as long as their
    windows do not intersect; the earliest one (start time, then id) is used.
    Intersecting windows are a data problem: by default the earliest still wins
    and a warning is logged, `strict=True` rejects the scan instead.
    """

    def __init__(self, schedules: ScheduleRepository, *, strict: bool = False):
        self._schedules = schedules
        self._strict = strict

    def resolve(self, *, teacher_id: int, classroom_id: int, day_of_week: int) -> Schedule:
        matches = [
            s
            for s in self._schedules.list_for(teacher_id=teacher_id, classroom_id=classroom_id, day_of_week=day_of_week)
            if s.active
            and s.teacher_id == teacher_id
            and s.classroom_id == classroom_id
            and s.day_of_week == day_of_week
        ]
        if not matches:
            raise NoScheduleToday("No scheduled class in this room today.")

        matches.sort(key=lambda s: (s.start_time, s.schedule_id))
        clashing = overlapping_ids(matches)
        if clashing:
            if self._strict:
                raise AmbiguousSchedule(f"Overlapping schedules {clashing}; fix the timetable before scanning.")
            logger.warning(
                "Overlapping schedules %s for teacher=%s classroom=%s day=%s; using %s",
                clashing,
                teacher_id,
                classroom_id,
                day_of_week,
                matches[0].schedule_id,
            )
        return matches[0]


def overlapping_ids(schedules: Sequence[Schedule]) -> List[int]:
    """Ids of schedules whose window intersects another one. Expects start-time order."""

    clashing: List[int] = []
    widest: Optional[Schedule] = None
    for s in schedules:
        if widest is not None and s.start_time < widest.end_time:
            if widest.schedule_id not in clashing:
                clashing.append(widest.schedule_id)
            clashing.append(s.schedule_id)
        if widest is None or s.end_time > widest.end_time:
            widest = s
    return clashing
