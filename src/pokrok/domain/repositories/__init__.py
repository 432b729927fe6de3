"""Repository protocol definitions for domain layer."""

from .habit import HabitRepository
from .step import StepRepository
from .user import UserRepository

__all__ = [
    "HabitRepository",
    "StepRepository",
    "UserRepository",
]
