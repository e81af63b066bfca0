from __future__ import annotations

import re

from ..core.constants import RFID_LENGTH
from ..core.exceptions import InvalidBadgeFormat, ValidationError

_BADGE_RE = re.compile(rf"[0-9]{{{RFID_LENGTH}}}")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_badge_id(value: str) -> str:
    """Badge ids are exactly 10 ASCII digits, no padding; anything else is refused before lookup."""

    badge = value or ""
    if not _BADGE_RE.fullmatch(badge):
        raise InvalidBadgeFormat(f"Invalid RFID number. Please enter exactly {RFID_LENGTH} digits.")
    return badge
