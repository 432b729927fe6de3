"""Habit service helpers for streaks and completion totals."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..logging_config import get_logger
from .dates import iter_days, iter_days_backward
from .ledger import CompletionLedger, CompletionState
from .schedule import HabitRecord, is_scheduled

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StreakStats:
    """Streak and total counters for one habit as of a given day."""

    current_streak: int = 0
    longest_streak: int = 0
    total_completed: int = 0
    total_missed: int = 0
    completed_outside_schedule: int = 0


def window_start(habit: HabitRecord, ledger: CompletionLedger, today: date) -> date:
    """Return the first day statistics are evaluated for.

    Uses ``habit.start_date``. When the habit has none, falls back to the
    earliest day recorded in the ledger, or ``today`` for an empty ledger.
    """

    start: Optional[date] = getattr(habit, "start_date", None)
    if start is not None:
        return start
    fallback = ledger.earliest() or today
    logger.debug(
        "Habit has no start date; using fallback window start",
        extra={"habit_id": getattr(habit, "id", None), "window_start": fallback.isoformat()},
    )
    return fallback


def _is_missed(state: CompletionState, day: date, today: date) -> bool:
    # An unset day only counts against the habit once it is in the past.
    return state is CompletionState.MISSED or (state is CompletionState.UNSET and day < today)


def compute_stats(habit: HabitRecord, ledger: CompletionLedger, today: date) -> StreakStats:
    """Return (current, longest, completed, missed, off-schedule) counters.

    Days are walked from the window start through ``today``. Days the habit is
    not scheduled on neither extend nor break a streak; an unset ``today`` is
    still planned and does not break one either.
    """

    start = window_start(habit, ledger, today)
    if start > today:
        return StreakStats()

    total_completed = 0
    total_missed = 0
    outside = 0
    longest = 0
    run = 0

    for day in iter_days(start, today):
        state = ledger.get(day)
        if not is_scheduled(habit, day):
            if state is CompletionState.COMPLETED:
                outside += 1
            continue
        if state is CompletionState.COMPLETED:
            total_completed += 1
            run += 1
            longest = max(longest, run)
        elif _is_missed(state, day, today):
            total_missed += 1
            run = 0

    current = 0
    for day in iter_days_backward(today, start):
        if not is_scheduled(habit, day):
            continue
        state = ledger.get(day)
        if state is CompletionState.COMPLETED:
            current += 1
        elif _is_missed(state, day, today):
            break

    return StreakStats(
        current_streak=current,
        longest_streak=longest,
        total_completed=total_completed,
        total_missed=total_missed,
        completed_outside_schedule=outside,
    )


def compute_streaks(habit: HabitRecord, ledger: CompletionLedger, today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak)."""

    stats = compute_stats(habit, ledger, today)
    return stats.current_streak, stats.longest_streak


__all__ = ["StreakStats", "compute_stats", "compute_streaks", "window_start"]
