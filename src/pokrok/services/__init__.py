"""Habit scheduling, ledger, streak and statistics services.

The application-level helpers in :mod:`pokrok.services.habits` depend on the
persistence models and are imported explicitly.
"""

from . import dates, day_state, ledger, schedule, statistics, streaks
from .day_state import DayClassification, DayState, classify
from .ledger import CompletionLedger, CompletionState
from .schedule import HabitRecord, is_scheduled
from .statistics import DateWindow, ProgressSummary, StepRecord, aggregate
from .streaks import StreakStats, compute_stats

__all__ = [
    "CompletionLedger",
    "CompletionState",
    "DateWindow",
    "DayClassification",
    "DayState",
    "HabitRecord",
    "ProgressSummary",
    "StepRecord",
    "StreakStats",
    "aggregate",
    "classify",
    "compute_stats",
    "dates",
    "day_state",
    "is_scheduled",
    "ledger",
    "schedule",
    "statistics",
    "streaks",
]
