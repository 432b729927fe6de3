"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import Habit, HabitCompletion

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int, *, user_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int, include_inactive: bool = False) -> list[Habit]:
        """List all habits, optionally including inactive ones."""
        with self.session_factory() as session:
            statement = (
                select(Habit).where(Habit.user_id == user_id).order_by(Habit.name)  # type: ignore
            )

            if not include_inactive:
                statement = statement.where(Habit.is_active == True)  # noqa: E712

            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_active(self, *, user_id: int) -> list[Habit]:
        """List only active habits."""
        return self.list_all(user_id=user_id, include_inactive=False)

    def create(self, habit: Habit, *, user_id: int) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            logger.info("Habit created", extra={"habit_id": habit.id, "user_id": user_id})
            return habit

    def update(self, habit: Habit, *, user_id: int) -> Habit:
        """Update an existing habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            merged = session.merge(habit)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged

    def delete(self, habit_id: int, *, user_id: int) -> None:
        """Delete a habit and its completions."""
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if habit:
                session.delete(habit)
                session.commit()
                logger.info("Habit deleted", extra={"habit_id": habit_id, "user_id": user_id})

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
        with self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
            )
            if start_date is not None:
                statement = statement.where(HabitCompletion.completion_date >= start_date)
            if end_date is not None:
                statement = statement.where(HabitCompletion.completion_date <= end_date)
            statement = statement.order_by(HabitCompletion.completion_date)  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def persist_completion(
        self, habit_id: int, day: date, completed: Optional[bool], *, user_id: int
    ) -> Optional[HabitCompletion]:
        """Upsert the outcome for ``day``; ``None`` deletes the row."""
        with self.session_factory() as session:
            existing = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completion_date == day)
            ).first()

            if completed is None:
                if existing:
                    session.delete(existing)
                    session.commit()
                return None

            if existing:
                if existing.completed == completed:
                    session.expunge(existing)
                    return existing
                existing.completed = completed
                existing.updated_at = datetime.now(timezone.utc)
                row = existing
            else:
                row = HabitCompletion(
                    user_id=user_id,
                    habit_id=habit_id,
                    completion_date=day,
                    completed=completed,
                )
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row
