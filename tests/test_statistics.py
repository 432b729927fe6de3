"""Tests for dashboard progress aggregation."""

from __future__ import annotations

from datetime import date

import pytest

from pokrok.services.statistics import (
    DateWindow,
    ProgressSummary,
    StepRecord,
    aggregate,
    daily_breakdown,
    progress_percent,
)
from tests.factories import make_habit, make_ledger

MONDAY = date(2024, 1, 1)


class TestDateWindow:
    def test_for_day(self):
        window = DateWindow.for_day(MONDAY)
        assert list(window.days()) == [MONDAY]
        assert window.length == 1

    def test_for_week_monday_first(self):
        window = DateWindow.for_week(date(2024, 1, 4))
        assert window == DateWindow(date(2024, 1, 1), date(2024, 1, 7))

    def test_for_week_sunday_first(self):
        window = DateWindow.for_week(date(2024, 1, 4), first_weekday=6)
        assert window == DateWindow(date(2023, 12, 31), date(2024, 1, 6))

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            DateWindow(date(2024, 1, 2), date(2024, 1, 1))

    @pytest.mark.parametrize(
        "period, previous, expected",
        [
            ("day", False, (date(2024, 3, 31), date(2024, 3, 31))),
            ("day", True, (date(2024, 3, 30), date(2024, 3, 30))),
            ("week", False, (date(2024, 3, 24), date(2024, 3, 31))),
            ("week", True, (date(2024, 3, 17), date(2024, 3, 24))),
            ("month", False, (date(2024, 2, 29), date(2024, 3, 31))),
            ("month", True, (date(2024, 1, 1), date(2024, 2, 1))),
            ("year", False, (date(2023, 3, 31), date(2024, 3, 31))),
            ("year", True, (date(2022, 1, 1), date(2023, 1, 1))),
        ],
    )
    def test_for_period(self, period, previous, expected):
        window = DateWindow.for_period(period, date(2024, 3, 31), previous=previous)
        assert (window.start, window.end) == expected

    def test_all_period_uses_account_start(self):
        window = DateWindow.for_period("all", date(2024, 3, 31), all_start=date(2023, 6, 1))
        assert window.start == date(2023, 6, 1)

    def test_unknown_period(self):
        with pytest.raises(ValueError):
            DateWindow.for_period("decade", date(2024, 3, 31))

    def test_all_has_no_previous(self):
        with pytest.raises(ValueError):
            DateWindow.for_period("all", date(2024, 3, 31), previous=True)

    def test_previous_month_and_year_snap_to_first_of_period(self):
        today = date(2024, 5, 15)

        month = DateWindow.for_period("month", today, previous=True)
        year = DateWindow.for_period("year", today, previous=True)

        assert (month.start, month.end) == (date(2024, 3, 1), date(2024, 4, 1))
        assert (year.start, year.end) == (date(2022, 1, 1), date(2023, 1, 1))


class TestAggregate:
    def test_day_with_habits_and_steps(self):
        entries = [
            (make_habit(habit_id="a"), make_ledger({"2024-01-01": True})),
            (make_habit(habit_id="b"), make_ledger()),
            (make_habit("custom", selected_days=["tuesday"], habit_id="c"), make_ledger()),
        ]
        steps = [
            StepRecord(MONDAY, True),
            {"date": "2024-01-01", "completed": False},
            StepRecord(date(2024, 1, 2), True),
        ]

        summary = aggregate(entries, steps, DateWindow.for_day(MONDAY))

        assert summary.habits_completed == 1
        assert summary.habits_total == 2
        assert summary.steps_completed == 1
        assert summary.steps_total == 2
        assert summary.completed == 2
        assert summary.total == 4
        assert summary.progress_percent == 50

    def test_week_counts_each_scheduled_instance(self):
        habit = make_habit("weekly", selected_days=["monday", "wednesday", "friday"])
        ledger = make_ledger({"2024-01-01": True, "2024-01-03": True, "2024-01-02": True})

        summary = aggregate([(habit, ledger)], [], DateWindow.for_week(MONDAY))

        # The Tuesday completion is outside the schedule and not counted.
        assert (summary.habits_completed, summary.habits_total) == (2, 3)
        assert summary.progress_percent == 67

    def test_always_show_only_counts_when_cadence_is_due(self):
        habit = make_habit("custom", selected_days=["monday"], always_show=True)
        summary = aggregate([(habit, make_ledger())], [], DateWindow.for_week(MONDAY))
        assert summary.habits_total == 1

    def test_days_before_start_are_not_counted(self):
        habit = make_habit(start_date=date(2024, 1, 5))
        summary = aggregate([(habit, make_ledger())], [], DateWindow.for_week(MONDAY))
        assert summary.habits_total == 3

    def test_steps_without_date_are_skipped(self):
        steps = [StepRecord(None, True), {"date": "someday", "completed": True}]
        summary = aggregate([], steps, DateWindow.for_day(MONDAY))
        assert summary == ProgressSummary()
        assert summary.progress_percent == 0

    def test_empty_inputs(self):
        summary = aggregate([], [], DateWindow.for_week(MONDAY))
        assert summary.total == 0
        assert summary.progress_percent == 0


def test_daily_breakdown():
    habit = make_habit()
    ledger = make_ledger({"2024-01-01": True})
    steps = [StepRecord(date(2024, 1, 2), False)]

    series = daily_breakdown([(habit, ledger)], steps, DateWindow(MONDAY, date(2024, 1, 2)))

    assert [point.day for point in series] == [MONDAY, date(2024, 1, 2)]
    assert series[0].summary.progress_percent == 100
    assert series[1].summary.completed == 0
    assert series[1].summary.total == 2


def test_summaries_add_up():
    left = ProgressSummary(habits_completed=1, habits_total=2)
    right = ProgressSummary(steps_completed=1, steps_total=1)
    assert (left + right).progress_percent == 67


@pytest.mark.parametrize(
    "completed, total, expected",
    [(0, 0, 0), (1, 2, 50), (1, 8, 13), (2, 3, 67), (1, 3, 33), (5, 4, 100)],
)
def test_progress_percent(completed, total, expected):
    assert progress_percent(completed, total) == expected
