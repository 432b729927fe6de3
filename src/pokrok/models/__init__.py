"""SQLModel table exports."""

from .habit import Habit, HabitCompletion
from .step import DailyStep
from .user import User

__all__ = [
    "DailyStep",
    "Habit",
    "HabitCompletion",
    "User",
]
