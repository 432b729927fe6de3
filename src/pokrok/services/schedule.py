"""Recurrence rules: decide whether a habit is due on a given calendar day."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

from .dates import WEEKDAY_NAMES, weekday_name

DAILY = "daily"
WEEKLY = "weekly"
CUSTOM = "custom"
MONTHLY = "monthly"

FREQUENCIES = (DAILY, WEEKLY, CUSTOM, MONTHLY)
SELECTED_DAY_FREQUENCIES = frozenset({WEEKLY, CUSTOM})


@dataclass(frozen=True)
class HabitRecord:
    """The scheduling view of a habit, detached from any persistence layer."""

    id: Any
    frequency: Optional[str] = DAILY
    selected_days: Any = None
    always_show: bool = False
    start_date: Optional[date] = None
    name: str = field(default="", compare=False)


def normalize_selected_days(raw: Any) -> frozenset[str]:
    """Return the lowercase weekday names contained in ``raw``.

    Persisted values come as lists, JSON-encoded lists or comma-separated
    strings. Anything unusable yields an empty set.
    """

    if raw is None:
        return frozenset()
    items: Iterable[Any]
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return frozenset()
        try:
            decoded = json.loads(text)
        except ValueError:
            decoded = text.split(",")
        items = decoded if isinstance(decoded, (list, tuple)) else [decoded]
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        return frozenset()
    return frozenset(
        name
        for name in (str(item).strip().lower() for item in items if item is not None)
        if name in WEEKDAY_NAMES
    )


def scheduled_weekdays(habit: HabitRecord) -> frozenset[str]:
    """Weekday names the habit's cadence selects (empty unless weekly/custom)."""

    if _frequency(habit) not in SELECTED_DAY_FREQUENCIES:
        return frozenset()
    return normalize_selected_days(getattr(habit, "selected_days", None))


def is_scheduled(habit: HabitRecord, day: date, *, honor_always_show: bool = True) -> bool:
    """Return True when ``habit`` is due on ``day``.

    ``always_show`` forces every day to be scheduled. Daily habits are due
    every day, weekly/custom habits on their selected weekdays. Monthly and
    unknown cadences are never scheduled here; they are done on demand.
    Pass ``honor_always_show=False`` to evaluate the cadence alone.
    """

    if honor_always_show and getattr(habit, "always_show", False):
        return True
    frequency = _frequency(habit)
    if frequency == DAILY:
        return True
    if frequency in SELECTED_DAY_FREQUENCIES:
        return weekday_name(day) in normalize_selected_days(getattr(habit, "selected_days", None))
    return False


def _frequency(habit: HabitRecord) -> Optional[str]:
    value = getattr(habit, "frequency", None)
    if value is None:
        return None
    return str(value).strip().lower()


__all__ = [
    "CUSTOM",
    "DAILY",
    "FREQUENCIES",
    "HabitRecord",
    "MONTHLY",
    "WEEKLY",
    "is_scheduled",
    "normalize_selected_days",
    "scheduled_weekdays",
]
