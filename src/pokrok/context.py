"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelHabitRepository,
    SQLModelStepRepository,
    SQLModelUserRepository,
)
from .models.user import User


@dataclass
class AppContext:
    """Configuration, session factory and repositories shared by entry points."""

    config: BaseConfig
    session_factory: Callable[[], Session]

    habit_repo: SQLModelHabitRepository
    step_repo: SQLModelStepRepository
    user_repo: SQLModelUserRepository

    current_user: Optional[User] = None

    def require_user(self) -> User:
        """Return the current user or raise if not set."""

        if self.current_user is None or self.current_user.id is None:
            raise RuntimeError("No current user selected")
        return self.current_user


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, ensure the schema exists and wire repositories."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        step_repo=SQLModelStepRepository(session_factory),
        user_repo=SQLModelUserRepository(session_factory),
    )


def ensure_user(ctx: AppContext, username: str) -> User:
    """Load ``username`` (creating it on first use) and make it the current user."""

    user = ctx.user_repo.get_by_username(username)
    if user is None:
        user = ctx.user_repo.create(User(username=username))
    ctx.current_user = user
    return user
