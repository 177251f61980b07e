"""
Date and time utility functions.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple


def now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def shift_months(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by delta calendar months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_start(year: int, month: int) -> datetime:
    return datetime(year, month, 1, tzinfo=timezone.utc)


def month_end(year: int, month: int) -> datetime:
    """Last instant of the month, inclusive."""
    next_year, next_month = shift_months(year, month, 1)
    return month_start(next_year, next_month) - timedelta(microseconds=1)


def last_months(reference: datetime, count: int) -> List[Tuple[int, int]]:
    """The `count` calendar months ending with reference's month, oldest first."""
    reference = as_utc(reference)
    return [
        shift_months(reference.year, reference.month, -offset)
        for offset in range(count - 1, -1, -1)
    ]


def in_range(value: datetime, start: datetime, end: datetime) -> bool:
    """Inclusive on both ends."""
    return start <= as_utc(value) <= end
