from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity: a teacher owning an RFID badge."""

    teacher_id: int
    name: str
    rfid_id: str
    teacher_code: Optional[str] = None
    is_active: bool = True
