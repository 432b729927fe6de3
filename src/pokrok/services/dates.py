"""Calendar-day helpers shared by the habit services.

All values are plain ``datetime.date`` objects. Stepping is done with
``timedelta(days=n)`` on dates, so daylight-saving transitions never shift a
day boundary.
"""

from __future__ import annotations

import re
from calendar import monthrange
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional

# Sunday=0 .. Saturday=6, the enumeration used by persisted ``selected_days``.
WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

_ISO_DAY = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")

ONE_DAY = timedelta(days=1)


def parse_day(value: object) -> Optional[date]:
    """Coerce ``value`` into a calendar day, or ``None`` when it is not one.

    Accepts ``date``, ``datetime`` (time part dropped) and ISO strings
    (``YYYY-MM-DD``, optionally followed by a time component).
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _ISO_DAY.match(value.strip())
    if match is None:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def require_day(value: object) -> date:
    """Like :func:`parse_day` but raises ``ValueError`` for unusable input."""

    day = parse_day(value)
    if day is None:
        raise ValueError(f"Expected a calendar date (YYYY-MM-DD), got {value!r}")
    return day


def local_day(value: Optional[datetime | date], tz: Optional[tzinfo] = None) -> Optional[date]:
    """Calendar day of a stored timestamp as seen in ``tz`` (system local time by default).

    Naive datetimes are read as UTC, which is how timestamps are persisted.
    Plain dates are returned unchanged.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(tz).date()
    return value


def weekday_name(day: date) -> str:
    """Return the lowercase English weekday name of ``day``."""

    # date.weekday() is Monday=0; shift to Sunday=0.
    return WEEKDAY_NAMES[(day.weekday() + 1) % 7]


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day from ``start`` to ``end`` inclusive; nothing if start > end."""

    cursor = start
    while cursor <= end:
        yield cursor
        cursor = cursor + ONE_DAY


def iter_days_backward(start: date, stop: date) -> Iterator[date]:
    """Yield days from ``start`` down to ``stop`` inclusive."""

    cursor = start
    while cursor >= stop:
        yield cursor
        cursor = cursor - ONE_DAY


def start_of_week(day: date, first_weekday: int = 0) -> date:
    """Return the first day of the week containing ``day``.

    ``first_weekday`` uses Python numbering (0 = Monday, 6 = Sunday).
    """

    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the last day of the target month."""

    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last = monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


__all__ = [
    "ONE_DAY",
    "WEEKDAY_NAMES",
    "iter_days",
    "iter_days_backward",
    "local_day",
    "parse_day",
    "require_day",
    "shift_months",
    "start_of_week",
    "weekday_name",
]
