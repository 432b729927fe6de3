"""Pytest configuration and shared fixtures for Pokrok tests.

Database fixtures give every test an isolated SQLite file; the pure
scheduling core is tested without them.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from pokrok.infra.database import create_session_factory
from pokrok.infra.repositories import SQLModelHabitRepository, SQLModelStepRepository
from pokrok.models import DailyStep, Habit, HabitCompletion, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session for arranging test data directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""
    u = User(username="tester")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def step_repo(session_factory) -> SQLModelStepRepository:
    return SQLModelStepRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(db_session, user):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Test Habit",
        frequency: str = "daily",
        selected_days: list[str] | None = None,
        always_show: bool = False,
        start_date: date | None = None,
        is_active: bool = True,
        owner: User | None = None,
    ) -> Habit:
        owner = owner or user
        habit = Habit(
            user_id=owner.id,
            name=name,
            frequency=frequency,
            selected_days=selected_days,
            always_show=always_show,
            start_date=start_date,
            is_active=is_active,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit


@pytest.fixture
def completion_factory(db_session, user):
    """Factory for persisting completion rows directly."""

    def _create_completion(habit: Habit, day: date, completed: bool = True) -> HabitCompletion:
        row = HabitCompletion(
            user_id=habit.user_id,
            habit_id=habit.id,
            completion_date=day,
            completed=completed,
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _create_completion


@pytest.fixture
def step_factory(db_session, user):
    """Factory for persisting daily steps."""

    def _create_step(day: date | None, completed: bool = False, title: str = "Step") -> DailyStep:
        step = DailyStep(user_id=user.id, title=title, date=day, completed=completed)
        db_session.add(step)
        db_session.commit()
        db_session.refresh(step)
        return step

    return _create_step
