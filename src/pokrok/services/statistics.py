"""Dashboard progress: scheduled habit instances and steps rolled up per window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, Iterator, Mapping, Optional

from .dates import iter_days, parse_day, shift_months, start_of_week
from .ledger import CompletionLedger
from .schedule import HabitRecord, is_scheduled

PERIODS = ("day", "week", "month", "year", "all")


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    @property
    def length(self) -> int:
        return (self.end - self.start).days + 1

    @classmethod
    def for_day(cls, day: date) -> "DateWindow":
        return cls(day, day)

    @classmethod
    def for_week(cls, day: date, first_weekday: int = 0) -> "DateWindow":
        """Calendar week containing ``day`` (0 = weeks start on Monday)."""

        start = start_of_week(day, first_weekday)
        return cls(start, start + timedelta(days=6))

    @classmethod
    def for_period(
        cls,
        period: str,
        today: date,
        *,
        previous: bool = False,
        all_start: Optional[date] = None,
    ) -> "DateWindow":
        """Rolling window ending ``today``: day, week (7 days back), month, year or all.

        With ``previous=True`` the comparison window is returned instead. For
        day and week it has the same length and ends where the current one
        starts. For month it runs from the 1st two months back to the 1st of
        the previous month; for year from Jan 1 two years back to Jan 1 of
        the previous year. ``all`` starts at ``all_start`` (typically the
        account creation day) and has no previous window.
        """

        if period == "day":
            return cls.for_day(today - timedelta(days=1) if previous else today)
        if period == "week":
            start = today - timedelta(days=7)
            if previous:
                return cls(start - timedelta(days=7), start)
            return cls(start, today)
        if period == "month":
            if previous:
                end = shift_months(today, -1).replace(day=1)
                return cls(shift_months(end, -1), end)
            return cls(shift_months(today, -1), today)
        if period == "year":
            if previous:
                return cls(date(today.year - 2, 1, 1), date(today.year - 1, 1, 1))
            return cls(shift_months(today, -12), today)
        if period == "all":
            if previous:
                raise ValueError("The 'all' period has no previous window")
            return cls(min(all_start or today, today), today)
        raise ValueError(f"Unknown statistics period {period!r}; expected one of {', '.join(PERIODS)}")


@dataclass(frozen=True, slots=True)
class StepRecord:
    """A daily step as supplied by the steps collaborator."""

    date: Optional[date]
    completed: bool = False


@dataclass(frozen=True, slots=True)
class ProgressSummary:
    habits_completed: int = 0
    habits_total: int = 0
    steps_completed: int = 0
    steps_total: int = 0

    @property
    def completed(self) -> int:
        return self.habits_completed + self.steps_completed

    @property
    def total(self) -> int:
        return self.habits_total + self.steps_total

    @property
    def progress_percent(self) -> int:
        return progress_percent(self.completed, self.total)

    def __add__(self, other: "ProgressSummary") -> "ProgressSummary":
        if not isinstance(other, ProgressSummary):
            return NotImplemented
        return ProgressSummary(
            habits_completed=self.habits_completed + other.habits_completed,
            habits_total=self.habits_total + other.habits_total,
            steps_completed=self.steps_completed + other.steps_completed,
            steps_total=self.steps_total + other.steps_total,
        )


@dataclass(frozen=True, slots=True)
class DailyProgress:
    day: date
    summary: ProgressSummary


def progress_percent(completed: int, total: int) -> int:
    """Whole percent, rounded half up and capped at 100; 0 for an empty total."""

    if total <= 0:
        return 0
    # Integer round-half-up of completed * 100 / total.
    return min((completed * 200 + total) // (2 * total), 100)


def _coerce_step(step: Any) -> StepRecord:
    if isinstance(step, StepRecord):
        return step
    if isinstance(step, Mapping):
        return StepRecord(date=parse_day(step.get("date")), completed=bool(step.get("completed")))
    return StepRecord(
        date=parse_day(getattr(step, "date", None)),
        completed=bool(getattr(step, "completed", False)),
    )


def _habit_counts_on(habit: HabitRecord, ledger: CompletionLedger, day: date) -> tuple[int, int]:
    """Return (completed, total) contribution of one habit on one day."""

    start = getattr(habit, "start_date", None)
    if start is not None and day < start:
        return 0, 0
    # Always-show habits are listed every day but only count when their cadence is due.
    if not is_scheduled(habit, day, honor_always_show=False):
        return 0, 0
    return (1 if ledger.is_completed(day) else 0), 1


def aggregate(
    entries: Iterable[tuple[HabitRecord, CompletionLedger]],
    steps: Iterable[Any],
    window: DateWindow,
) -> ProgressSummary:
    """Sum scheduled habit instances and dated steps inside ``window``.

    Numerators and denominators are added as-is, without weighting.
    """

    habits_completed = 0
    habits_total = 0
    for habit, ledger in entries:
        for day in window.days():
            done, due = _habit_counts_on(habit, ledger, day)
            habits_completed += done
            habits_total += due

    steps_completed = 0
    steps_total = 0
    for raw in steps:
        step = _coerce_step(raw)
        if step.date is None or step.date not in window:
            continue
        steps_total += 1
        if step.completed:
            steps_completed += 1

    return ProgressSummary(
        habits_completed=habits_completed,
        habits_total=habits_total,
        steps_completed=steps_completed,
        steps_total=steps_total,
    )


def daily_breakdown(
    entries: Iterable[tuple[HabitRecord, CompletionLedger]],
    steps: Iterable[Any],
    window: DateWindow,
) -> list[DailyProgress]:
    """Per-day summaries across ``window`` for chart series."""

    pairs = list(entries)
    step_records = [_coerce_step(step) for step in steps]
    return [
        DailyProgress(day=day, summary=aggregate(pairs, step_records, DateWindow.for_day(day)))
        for day in window.days()
    ]


__all__ = [
    "DailyProgress",
    "DateWindow",
    "PERIODS",
    "ProgressSummary",
    "StepRecord",
    "aggregate",
    "daily_breakdown",
    "progress_percent",
]
