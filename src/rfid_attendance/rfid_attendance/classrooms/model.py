from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Classroom:
    classroom_id: int
    name: str
    location: str = ""
