from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def truncate_to_minute(value: time) -> time:
    """Scans are compared at minute precision."""
    return value.replace(second=0, microsecond=0)


def format_12h(value: time) -> str:
    """Display form used in notifications, e.g. 8:05 AM."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def day_of_week(value: date) -> int:
    """Day of week with Sunday=0 (Python's weekday() has Monday=0)."""
    return (value.weekday() + 1) % 7
