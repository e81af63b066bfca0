from __future__ import annotations

from datetime import date, datetime, time

# Only the time of day matters; every value is pinned to the same date.
REFERENCE_DATE = date(2000, 1, 1)


def on_reference_date(value: time) -> datetime:
    return datetime.combine(REFERENCE_DATE, value)


def minutes_between(earlier: time, later: time) -> int:
    return int((on_reference_date(later) - on_reference_date(earlier)).total_seconds() // 60)
