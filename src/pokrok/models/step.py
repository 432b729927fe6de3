"""Daily steps, counted next to habits in progress summaries."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class DailyStep(SQLModel, table=True):
    """A one-off task planned for a specific day."""

    __tablename__: ClassVar[str] = "daily_step"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=255)
    date: Optional[dt.date] = Field(default=None, index=True)
    completed: bool = Field(default=False, nullable=False)

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="steps"))
