from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def try_parse_date(value: Optional[str]) -> Optional[date]:
    """Like parse_iso_date, but returns None for blank or malformed input."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def to_date_string(value: date) -> str:
    """Format from the calendar fields, never through a UTC timestamp."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def day_of_week(value: date) -> int:
    """Weekday index with Sunday = 0 ... Saturday = 6."""
    return value.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive.

    Steps on `date` objects, so there is no clock time for a DST
    transition or a UTC offset to shift.
    """
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def today_local() -> date:
    return now_local().date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
