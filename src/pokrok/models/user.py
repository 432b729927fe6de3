"""Account owning habits and steps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit
    from .step import DailyStep


class User(SQLModel, table=True):
    """Application user; only the signup time matters to the habit core."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True, index=True, max_length=64)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    habits: list["Habit"] = Relationship(
        sa_relationship=relationship("Habit", back_populates="user"),
    )
    steps: list["DailyStep"] = Relationship(
        sa_relationship=relationship("DailyStep", back_populates="user"),
    )
