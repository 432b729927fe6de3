"""Daily step repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from ...models.step import DailyStep


class StepRepository(Protocol):
    """Read access to daily steps for progress summaries."""

    def list_between(self, start_date: date, end_date: date, *, user_id: int) -> list[DailyStep]:
        """Steps dated within the inclusive range."""
        ...

    def create(self, step: DailyStep, *, user_id: int) -> DailyStep:
        """Create a new step."""
        ...
