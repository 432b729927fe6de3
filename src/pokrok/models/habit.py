"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..services.schedule import HabitRecord

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A user-defined habit with its recurrence rule."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120, index=True)
    description: str = Field(default="", max_length=500)
    frequency: str = Field(default="daily", max_length=16)
    selected_days: Optional[list[str]] = Field(default=None, sa_column=Column(JSON))
    always_show: bool = Field(default=False, nullable=False)
    start_date: Optional[date] = Field(default=None)
    is_active: bool = Field(default=True, nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    completions: list["HabitCompletion"] = Relationship(
        sa_relationship=relationship(
            "HabitCompletion", back_populates="habit", cascade="all, delete-orphan"
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))

    def to_record(self, *, start_date: Optional[date] = None) -> HabitRecord:
        """Detach the scheduling fields; ``start_date`` overrides the stored one."""

        return HabitRecord(
            id=self.id,
            name=self.name,
            frequency=self.frequency,
            selected_days=tuple(self.selected_days) if self.selected_days else None,
            always_show=self.always_show,
            start_date=start_date if start_date is not None else self.start_date,
        )


class HabitCompletion(SQLModel, table=True):
    """Recorded outcome of a habit on a calendar day; no row means unset."""

    __tablename__: ClassVar[str] = "habit_completion"
    __table_args__ = (
        UniqueConstraint("user_id", "habit_id", "completion_date", name="uq_habit_completion_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    completion_date: date = Field(nullable=False, index=True)
    completed: bool = Field(nullable=False)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    habit: "Habit" = Relationship(
        sa_relationship=relationship("Habit", back_populates="completions"),
    )
