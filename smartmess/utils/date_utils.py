"""
Date and time utility functions used across the project.

Notes:
- Timestamps are timezone-aware UTC datetimes.
- Calendar dates ("today", menu dates, attendance dates) are resolved in the
  configured TIMEZONE through `local_today`, and nowhere else.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, List, Optional, Tuple

import pytz

logger = logging.getLogger(__name__)

UTC = timezone.utc

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def local_today(tz_name: str = "UTC") -> date:
    """
    Return the current calendar date in the given timezone.

    This is the single definition of "today" for menus, attendance and
    dashboard counters.

    Raises:
        pytz.UnknownTimeZoneError: If tz_name is not a known zone
    """
    return datetime.now(pytz.timezone(tz_name)).date()


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD string, returning None for anything malformed."""
    if not value or len(value.strip()) != 10:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Ignoring malformed date {value!r}")
        return None


def day_name(d: date) -> str:
    """Return the English weekday name, e.g. ``Monday``."""
    return DAY_NAMES[d.weekday()]


def short_day_name(d: date) -> str:
    """Return the abbreviated weekday name, e.g. ``Mon``."""
    return day_name(d)[:3]


def daterange(start: date, end: date) -> Iterator[date]:
    """Yield each date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def trailing_days(end: date, days: int) -> List[date]:
    """Return the ``days`` dates ending at ``end``, oldest first."""
    return list(daterange(end - timedelta(days=days - 1), end))


def day_bounds_utc(d: date, tz_name: str = "UTC") -> Tuple[datetime, datetime]:
    """
    Return the UTC instants where calendar day ``d`` in ``tz_name`` starts
    and where the following day starts.
    """
    zone = pytz.timezone(tz_name)
    start = zone.localize(datetime.combine(d, time.min))
    end = zone.localize(datetime.combine(d + timedelta(days=1), time.min))
    return start.astimezone(UTC), end.astimezone(UTC)
