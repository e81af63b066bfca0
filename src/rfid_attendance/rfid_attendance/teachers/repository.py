from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    def get_by_rfid(self, rfid_id: str) -> Optional[Teacher]:
        """Return the active teacher owning this badge, if any."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError
