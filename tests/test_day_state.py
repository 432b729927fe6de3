"""Tests for calendar day classification."""

from __future__ import annotations

from datetime import date

import pytest

from pokrok.services.day_state import (
    DayState,
    classify,
    classify_range,
    month_grid,
    next_toggle_state,
)
from pokrok.services.ledger import CompletionState
from tests.factories import make_habit, make_ledger

TODAY = date(2024, 1, 10)  # a Wednesday


class TestPrecedence:
    def test_completed_wins(self):
        ledger = make_ledger({"2024-01-05": True})
        result = classify(make_habit(), ledger, date(2024, 1, 5), TODAY)
        assert result.state is DayState.COMPLETED
        assert result.clickable

    def test_explicit_miss(self):
        ledger = make_ledger({"2024-01-05": False})
        assert classify(make_habit(), ledger, date(2024, 1, 5), TODAY).state is DayState.MISSED

    def test_unset_past_day_is_missed(self):
        result = classify(make_habit(), make_ledger(), date(2024, 1, 5), TODAY)
        assert result.state is DayState.MISSED
        assert result.scheduled

    def test_unscheduled_past_day_is_still_missed(self):
        habit = make_habit("custom", selected_days=["monday"])
        result = classify(habit, make_ledger(), date(2024, 1, 9), TODAY)
        assert result.state is DayState.MISSED
        assert not result.scheduled
        assert result.clickable

    def test_today_scheduled_unset_is_planned_sub_state(self):
        result = classify(make_habit(), make_ledger(), TODAY, TODAY)
        assert result.state is DayState.TODAY
        assert result.today_state is DayState.PLANNED
        assert result.is_today

    def test_today_not_scheduled(self):
        habit = make_habit("custom", selected_days=["monday"])
        result = classify(habit, make_ledger(), TODAY, TODAY)
        assert result.state is DayState.TODAY
        assert result.today_state is DayState.NOT_SCHEDULED

    def test_today_completed_carries_sub_state(self):
        result = classify(make_habit(), make_ledger({"2024-01-10": True}), TODAY, TODAY)
        assert result.state is DayState.COMPLETED
        assert result.today_state is DayState.COMPLETED

    def test_future_scheduled_is_planned(self):
        result = classify(make_habit(), make_ledger(), date(2024, 1, 11), TODAY)
        assert result.state is DayState.PLANNED
        assert not result.clickable
        assert result.today_state is None

    def test_future_unscheduled(self):
        habit = make_habit("custom", selected_days=["monday"])
        result = classify(habit, make_ledger(), date(2024, 1, 11), TODAY)
        assert result.state is DayState.NOT_SCHEDULED
        assert not result.clickable

    @pytest.mark.parametrize("day", [date(2023, 12, 31), date(2024, 1, 12)])
    def test_before_start_is_inactive(self, day):
        habit = make_habit(start_date=date(2024, 1, 1) if day.year == 2023 else date(2024, 1, 15))
        result = classify(habit, make_ledger(), day, TODAY)
        assert result.state is DayState.INACTIVE
        assert not result.clickable

    def test_completed_outside_schedule_is_not_reported_as_scheduled(self):
        habit = make_habit("weekly", selected_days=["monday", "wednesday"])
        tuesday = date(2024, 1, 9)
        result = classify(habit, make_ledger({"2024-01-09": True}), tuesday, TODAY)
        assert result.state is DayState.COMPLETED
        assert not result.scheduled


def test_classify_is_deterministic():
    habit = make_habit("custom", selected_days=["friday"])
    ledger = make_ledger({"2024-01-05": True})
    assert classify(habit, ledger, date(2024, 1, 5), TODAY) == classify(
        habit, ledger, date(2024, 1, 5), TODAY
    )


def test_classify_range():
    ledger = make_ledger({"2024-01-09": True})
    states = [c.state for c in classify_range(make_habit(), ledger, date(2024, 1, 8), date(2024, 1, 11), TODAY)]
    assert states == [DayState.MISSED, DayState.COMPLETED, DayState.TODAY, DayState.PLANNED]


class TestMonthGrid:
    def test_weeks_are_padded_outside_month(self):
        grid = month_grid(make_habit(), make_ledger(), 2024, 2, TODAY)

        # February 2024 starts on a Thursday; Monday-first weeks.
        assert grid[0][:3] == [None, None, None]
        assert grid[0][3].day == date(2024, 2, 1)
        assert all(len(week) == 7 for week in grid)
        days = [cell.day for week in grid for cell in week if cell is not None]
        assert len(days) == 29

    def test_sunday_first(self):
        grid = month_grid(make_habit(), make_ledger(), 2024, 1, TODAY, first_weekday=6)
        assert grid[0][0] is None
        assert grid[0][1].day == date(2024, 1, 1)

    def test_states_follow_classification(self):
        grid = month_grid(make_habit(), make_ledger({"2024-01-02": True}), 2024, 1, TODAY)
        by_day = {cell.day: cell.state for week in grid for cell in week if cell is not None}
        assert by_day[date(2024, 1, 2)] is DayState.COMPLETED
        assert by_day[date(2024, 1, 3)] is DayState.MISSED
        assert by_day[TODAY] is DayState.TODAY
        assert by_day[date(2024, 1, 31)] is DayState.PLANNED


class TestToggle:
    def test_completed_becomes_missed(self):
        current = classify(make_habit(), make_ledger({"2024-01-05": True}), date(2024, 1, 5), TODAY)
        assert next_toggle_state(current) is CompletionState.MISSED

    @pytest.mark.parametrize("entries", [{}, {"2024-01-05": False}])
    def test_other_clickable_days_become_completed(self, entries):
        current = classify(make_habit(), make_ledger(entries), date(2024, 1, 5), TODAY)
        assert next_toggle_state(current) is CompletionState.COMPLETED

    def test_today_becomes_completed(self):
        current = classify(make_habit(), make_ledger(), TODAY, TODAY)
        assert next_toggle_state(current) is CompletionState.COMPLETED

    def test_future_day_cannot_be_toggled(self):
        current = classify(make_habit(), make_ledger(), date(2024, 1, 20), TODAY)
        with pytest.raises(ValueError):
            next_toggle_state(current)
