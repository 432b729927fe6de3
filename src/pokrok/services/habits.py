"""Application helpers tying the habit repositories to the scheduling core.

These functions load a habit and its completions, resolve the statistics
window and delegate to the pure modules (:mod:`.streaks`, :mod:`.day_state`,
:mod:`.statistics`). ``today`` is always passed in by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional

from ..config import STATS_ANCHORS
from ..domain.repositories.habit import HabitRepository
from ..domain.repositories.step import StepRepository
from ..logging_config import get_logger
from ..models.habit import Habit
from .dates import local_day
from .day_state import DayClassification, classify, month_grid, next_toggle_state
from .ledger import CompletionLedger, CompletionState
from .schedule import HabitRecord
from .statistics import (
    DailyProgress,
    DateWindow,
    ProgressSummary,
    StepRecord,
    aggregate,
    daily_breakdown,
)
from .streaks import StreakStats, compute_stats

logger = get_logger(__name__)


class HabitNotFoundError(ValueError):
    """Raised when a habit does not exist for the requesting user."""


class HabitToggleError(ValueError):
    """Raised when a day cannot be toggled (future or before the habit started)."""


@dataclass(frozen=True)
class HabitSnapshot:
    """A habit's scheduling record together with its ledger."""

    record: HabitRecord
    ledger: CompletionLedger


def habit_start_date(
    habit: Habit,
    ledger: CompletionLedger,
    *,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> Optional[date]:
    """Resolve the first day statistics are computed from.

    ``anchor="habit"`` uses the habit's explicit start date; without one, the
    earlier of its creation day and its first completed day. ``anchor="account"``
    uses the owner's signup day. Stored timestamps are converted to calendar
    days in ``tz`` (system local time by default), the same calendar ``today``
    is given in. ``None`` leaves the choice to the streak calculator's fallback.
    """

    if anchor not in STATS_ANCHORS:
        raise ValueError(f"Unknown statistics anchor {anchor!r}")
    if anchor == "account":
        return local_day(account_created, tz)
    if habit.start_date is not None:
        return habit.start_date
    candidates = [d for d in (local_day(habit.created_at, tz), ledger.earliest_completed()) if d]
    return min(candidates) if candidates else None


def _require_habit(repo: HabitRepository, habit_id: int, user_id: int) -> Habit:
    habit = repo.get_by_id(habit_id, user_id=user_id)
    if habit is None:
        raise HabitNotFoundError(f"Habit {habit_id} not found")
    return habit


def load_ledger(repo: HabitRepository, habit_id: int, *, user_id: int) -> CompletionLedger:
    """Assemble the ledger of one habit from its completion rows."""

    return CompletionLedger.from_records(repo.get_completions(habit_id, user_id=user_id))


def load_snapshot(
    repo: HabitRepository,
    habit: Habit,
    *,
    user_id: int,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> HabitSnapshot:
    ledger = load_ledger(repo, habit.id, user_id=user_id)
    start = habit_start_date(
        habit, ledger, anchor=anchor, account_created=account_created, tz=tz
    )
    return HabitSnapshot(record=habit.to_record(start_date=start), ledger=ledger)


def record_completion(
    repo: HabitRepository,
    habit_id: int,
    day: date,
    state: CompletionState,
    *,
    user_id: int,
) -> CompletionLedger:
    """Persist ``state`` for ``day`` and return the refreshed ledger.

    Recording the same state twice leaves the stored data unchanged.
    """

    _require_habit(repo, habit_id, user_id)
    state = CompletionState(state)
    repo.persist_completion(habit_id, day, state.as_value(), user_id=user_id)
    logger.info(
        "Habit completion recorded",
        extra={"habit_id": habit_id, "day": day.isoformat(), "state": state.value},
    )
    return load_ledger(repo, habit_id, user_id=user_id)


def toggle_completion(
    repo: HabitRepository,
    habit_id: int,
    day: date,
    *,
    today: date,
    user_id: int,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> DayClassification:
    """Flip a clickable day between completed and missed; return its new classification."""

    habit = _require_habit(repo, habit_id, user_id)
    snapshot = load_snapshot(
        repo, habit, user_id=user_id, anchor=anchor, account_created=account_created, tz=tz
    )
    current = classify(snapshot.record, snapshot.ledger, day, today)
    if not current.clickable:
        raise HabitToggleError(
            f"Cannot toggle habit {habit_id} on {day.isoformat()}: day is {current.state.value}"
        )
    new_state = next_toggle_state(current)
    ledger = record_completion(repo, habit_id, day, new_state, user_id=user_id)
    return classify(snapshot.record, ledger, day, today)


def habit_stats(
    repo: HabitRepository,
    habit_id: int,
    *,
    today: date,
    user_id: int,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> StreakStats:
    habit = _require_habit(repo, habit_id, user_id)
    snapshot = load_snapshot(
        repo, habit, user_id=user_id, anchor=anchor, account_created=account_created, tz=tz
    )
    return compute_stats(snapshot.record, snapshot.ledger, today)


def habit_calendar(
    repo: HabitRepository,
    habit_id: int,
    year: int,
    month: int,
    *,
    today: date,
    user_id: int,
    first_weekday: int = 0,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> list[list[Optional[DayClassification]]]:
    """Month grid of day classifications for one habit."""

    habit = _require_habit(repo, habit_id, user_id)
    snapshot = load_snapshot(
        repo, habit, user_id=user_id, anchor=anchor, account_created=account_created, tz=tz
    )
    return month_grid(
        snapshot.record, snapshot.ledger, year, month, today, first_weekday=first_weekday
    )


def _snapshots(
    repo: HabitRepository,
    habits: Iterable[Habit],
    *,
    user_id: int,
    anchor: str,
    account_created: Optional[datetime | date],
    tz: Optional[tzinfo],
) -> list[tuple[HabitRecord, CompletionLedger]]:
    pairs = []
    for habit in habits:
        snapshot = load_snapshot(
            repo, habit, user_id=user_id, anchor=anchor, account_created=account_created, tz=tz
        )
        pairs.append((snapshot.record, snapshot.ledger))
    return pairs


def _step_records(step_repo: StepRepository, window: DateWindow, user_id: int) -> list[StepRecord]:
    return [
        StepRecord(date=step.date, completed=step.completed)
        for step in step_repo.list_between(window.start, window.end, user_id=user_id)
    ]


def dashboard_summary(
    habit_repo: HabitRepository,
    step_repo: StepRepository,
    window: DateWindow,
    *,
    user_id: int,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> ProgressSummary:
    """Progress of all active habits plus dated steps inside ``window``."""

    pairs = _snapshots(
        habit_repo,
        habit_repo.list_active(user_id=user_id),
        user_id=user_id,
        anchor=anchor,
        account_created=account_created,
        tz=tz,
    )
    summary = aggregate(pairs, _step_records(step_repo, window, user_id), window)
    logger.debug(
        "Dashboard summary computed",
        extra={
            "user_id": user_id,
            "window_start": window.start.isoformat(),
            "window_end": window.end.isoformat(),
            "completed": summary.completed,
            "total": summary.total,
        },
    )
    return summary


def dashboard_breakdown(
    habit_repo: HabitRepository,
    step_repo: StepRepository,
    window: DateWindow,
    *,
    user_id: int,
    anchor: str = "habit",
    account_created: Optional[datetime | date] = None,
    tz: Optional[tzinfo] = None,
) -> list[DailyProgress]:
    """Per-day progress series for ``window``."""

    pairs = _snapshots(
        habit_repo,
        habit_repo.list_active(user_id=user_id),
        user_id=user_id,
        anchor=anchor,
        account_created=account_created,
        tz=tz,
    )
    return daily_breakdown(pairs, _step_records(step_repo, window, user_id), window)


__all__ = [
    "HabitNotFoundError",
    "HabitSnapshot",
    "HabitToggleError",
    "dashboard_breakdown",
    "dashboard_summary",
    "habit_calendar",
    "habit_start_date",
    "habit_stats",
    "load_ledger",
    "load_snapshot",
    "record_completion",
    "toggle_completion",
]
