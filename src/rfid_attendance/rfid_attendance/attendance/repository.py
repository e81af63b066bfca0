from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, Direction
from .model import AttendanceLog


class AttendanceRepository(Protocol):
    def list_for_teacher_classroom_date(
        self, *, teacher_id: int, classroom_id: int, log_date: date
    ) -> Sequence[AttendanceLog]:
        """Logs for one teacher in one classroom on one date, oldest first."""

        raise NotImplementedError

    def latest_scan_at(self, *, teacher_id: int, classroom_id: int) -> Optional[datetime]:
        """created_at of the newest log for the pair on any date, or None."""

        raise NotImplementedError

    def list_for_date(self, *, log_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def create_log(
        self,
        *,
        teacher_id: int,
        classroom_id: int,
        schedule_id: int,
        log_date: date,
        scan_time: time,
        scan_type: Direction,
        status: AttendanceStatus,
        created_at: datetime,
    ) -> int:
        """Insert one log row and return its id.

        Raises PersistenceFailure when the write does not commit.
        """

        raise NotImplementedError
