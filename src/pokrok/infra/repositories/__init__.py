"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitRepository
from .step import SQLModelStepRepository
from .user import SQLModelUserRepository

__all__ = [
    "SQLModelHabitRepository",
    "SQLModelStepRepository",
    "SQLModelUserRepository",
]
