"""Classify calendar days of a habit for calendar and timeline views."""

from __future__ import annotations

from calendar import Calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .dates import iter_days
from .ledger import CompletionLedger, CompletionState
from .schedule import HabitRecord, is_scheduled
from .streaks import window_start


class DayState(str, Enum):
    COMPLETED = "completed"
    MISSED = "missed"
    TODAY = "today"
    PLANNED = "planned"
    NOT_SCHEDULED = "not_scheduled"
    INACTIVE = "inactive"


CLICKABLE_STATES = frozenset({DayState.COMPLETED, DayState.MISSED, DayState.TODAY})


@dataclass(frozen=True, slots=True)
class DayClassification:
    """State of one day plus what a caller needs to handle a click on it.

    ``today_state`` is only set for the evaluation day itself and carries the
    sub-state shown there (completed, missed, planned or not scheduled).
    """

    day: date
    state: DayState
    scheduled: bool
    today_state: Optional[DayState] = None

    @property
    def clickable(self) -> bool:
        return self.state in CLICKABLE_STATES

    @property
    def is_today(self) -> bool:
        return self.today_state is not None


def classify(
    habit: HabitRecord, ledger: CompletionLedger, day: date, today: date
) -> DayClassification:
    """Return the state of ``day``; the first matching rule wins.

    Recorded completions and misses take precedence. Any unrecorded past day
    since the habit started reads as missed, scheduled or not, so it can still
    be marked done retroactively. Days before the start are inactive.
    """

    start = window_start(habit, ledger, today)
    scheduled = is_scheduled(habit, day)
    recorded = ledger.get(day)
    today_state = _today_state(recorded, scheduled) if day == today else None

    if recorded is CompletionState.COMPLETED:
        state = DayState.COMPLETED
    elif recorded is CompletionState.MISSED:
        state = DayState.MISSED
    elif start <= day < today:
        state = DayState.MISSED
    elif day == today:
        state = DayState.TODAY
    elif day < start:
        state = DayState.INACTIVE
    elif scheduled:
        state = DayState.PLANNED
    else:
        state = DayState.NOT_SCHEDULED

    return DayClassification(day=day, state=state, scheduled=scheduled, today_state=today_state)


def _today_state(recorded: CompletionState, scheduled: bool) -> DayState:
    if recorded is CompletionState.COMPLETED:
        return DayState.COMPLETED
    if recorded is CompletionState.MISSED:
        return DayState.MISSED
    return DayState.PLANNED if scheduled else DayState.NOT_SCHEDULED


def classify_range(
    habit: HabitRecord, ledger: CompletionLedger, start: date, end: date, today: date
) -> list[DayClassification]:
    """Classify every day from ``start`` to ``end`` inclusive."""

    return [classify(habit, ledger, day, today) for day in iter_days(start, end)]


def month_grid(
    habit: HabitRecord,
    ledger: CompletionLedger,
    year: int,
    month: int,
    today: date,
    *,
    first_weekday: int = 0,
) -> list[list[Optional[DayClassification]]]:
    """Return the month as weeks of classifications.

    Slots outside the month are ``None``. ``first_weekday`` uses Python
    numbering (0 = Monday).
    """

    weeks: list[list[Optional[DayClassification]]] = []
    for week in Calendar(firstweekday=first_weekday).monthdatescalendar(year, month):
        weeks.append(
            [classify(habit, ledger, day, today) if day.month == month else None for day in week]
        )
    return weeks


def next_toggle_state(current: DayClassification) -> CompletionState:
    """State a click on ``current`` records: completed days flip to missed, others to completed."""

    if not current.clickable:
        raise ValueError(f"Day {current.day.isoformat()} ({current.state.value}) cannot be toggled")
    if current.state is DayState.COMPLETED:
        return CompletionState.MISSED
    return CompletionState.COMPLETED


__all__ = [
    "CLICKABLE_STATES",
    "DayClassification",
    "DayState",
    "classify",
    "classify_range",
    "month_grid",
    "next_toggle_state",
]
