"""SQLModel implementation of DailyStep repository."""

from __future__ import annotations

from datetime import date
from typing import Callable

from sqlmodel import Session, select

from ...models.step import DailyStep


class SQLModelStepRepository:
    """SQLModel-based daily step repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def list_between(self, start_date: date, end_date: date, *, user_id: int) -> list[DailyStep]:
        """Steps dated within the inclusive range, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(DailyStep)
                .where(DailyStep.user_id == user_id)
                .where(DailyStep.date >= start_date)  # type: ignore[operator]
                .where(DailyStep.date <= end_date)  # type: ignore[operator]
                .order_by(DailyStep.date, DailyStep.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, step: DailyStep, *, user_id: int) -> DailyStep:
        """Create a new step."""
        with self.session_factory() as session:
            step.user_id = user_id
            session.add(step)
            session.commit()
            session.refresh(step)
            session.expunge(step)
            return step
