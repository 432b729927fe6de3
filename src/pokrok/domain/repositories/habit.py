"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitCompletion


class HabitRepository(Protocol):
    """Repository for habits and their per-day completion rows."""

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, *, user_id: int, include_inactive: bool = False) -> list[Habit]:
        """List all habits, optionally including inactive ones."""
        ...

    def list_active(self, *, user_id: int) -> list[Habit]:
        """List only active habits."""
        ...

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        ...

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        ...

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit and its completions."""
        ...

    # Completion operations
    def get_completions(
        self,
        habit_id: int,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HabitCompletion]:
        """Completion rows for a habit, ascending by date."""
        ...

    def persist_completion(
        self, habit_id: int, day: date, completed: Optional[bool], *, user_id: int
    ) -> Optional[HabitCompletion]:
        """Upsert the outcome for ``day``; ``None`` deletes the row."""
        ...
