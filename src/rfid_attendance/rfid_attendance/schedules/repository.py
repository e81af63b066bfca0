from __future__ import annotations

from typing import Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def list_for(self, *, teacher_id: int, classroom_id: int, day_of_week: int) -> Sequence[Schedule]:
        """All schedules for a teacher in a classroom on a day of week."""

        raise NotImplementedError

    def list_active_for_day(self, *, day_of_week: int) -> Sequence[Schedule]:
        raise NotImplementedError
