"""Sparse per-habit completion record keyed by calendar day."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from ..logging_config import get_logger
from .dates import parse_day, require_day

logger = get_logger(__name__)


class CompletionState(str, Enum):
    """Tri-state value of a ledger day. ``UNSET`` is never stored."""

    COMPLETED = "completed"
    MISSED = "missed"
    UNSET = "unset"

    @classmethod
    def from_value(cls, value: Optional[bool]) -> "CompletionState":
        """Map the persisted boolean (or null) onto a state."""

        if value is None:
            return cls.UNSET
        return cls.COMPLETED if value else cls.MISSED

    def as_value(self) -> Optional[bool]:
        if self is CompletionState.UNSET:
            return None
        return self is CompletionState.COMPLETED


class CompletionLedger:
    """Date -> completed/missed mapping for one habit.

    Absence of a day means "no record", which is different from an explicit
    miss. The ledger only ever holds what the user recorded; derived values
    such as streaks are never written back into it.
    """

    def __init__(self, entries: Optional[Mapping[Any, Any]] = None) -> None:
        self._entries: dict[date, bool] = {}
        for raw_day, raw_value in (entries or {}).items():
            day = parse_day(raw_day)
            if day is None:
                logger.warning("Skipping malformed ledger date", extra={"ledger_key": raw_day})
                continue
            if raw_value is None:
                continue
            if not isinstance(raw_value, bool):
                logger.warning(
                    "Skipping non-boolean ledger value",
                    extra={"ledger_key": raw_day, "ledger_value": raw_value},
                )
                continue
            self._entries[day] = raw_value

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "CompletionLedger":
        """Build a ledger from completion rows or mappings with ``date``/``completed``."""

        entries: dict[Any, Any] = {}
        for record in records:
            if isinstance(record, Mapping):
                day = record.get("date", record.get("completion_date"))
                completed = record.get("completed")
            else:
                day = getattr(record, "date", None) or getattr(record, "completion_date", None)
                completed = getattr(record, "completed", None)
            entries[day] = completed
        return cls(entries)

    def get(self, day: date) -> CompletionState:
        value = self._entries.get(require_day(day))
        return CompletionState.from_value(value)

    def set(self, day: date, state: CompletionState) -> None:
        """Record ``state`` for ``day``; ``UNSET`` removes the day entirely."""

        key = require_day(day)
        state = CompletionState(state)
        if state is CompletionState.UNSET:
            self._entries.pop(key, None)
        else:
            self._entries[key] = state is CompletionState.COMPLETED

    def is_completed(self, day: date) -> bool:
        return self.get(day) is CompletionState.COMPLETED

    def dates_where(self, predicate: Callable[[date, CompletionState], bool]) -> list[date]:
        """Recorded days (ascending) for which ``predicate(day, state)`` holds."""

        return [
            day
            for day in sorted(self._entries)
            if predicate(day, CompletionState.from_value(self._entries[day]))
        ]

    def earliest(self) -> Optional[date]:
        return min(self._entries) if self._entries else None

    def earliest_completed(self) -> Optional[date]:
        completed = self.dates_where(lambda _day, state: state is CompletionState.COMPLETED)
        return completed[0] if completed else None

    def to_dict(self) -> dict[str, bool]:
        """Serialize to the persistence format: ``{"YYYY-MM-DD": bool}``."""

        return {day.isoformat(): value for day, value in sorted(self._entries.items())}

    def copy(self) -> "CompletionLedger":
        clone = CompletionLedger()
        clone._entries = dict(self._entries)
        return clone

    def __contains__(self, day: object) -> bool:
        parsed = parse_day(day)
        return parsed is not None and parsed in self._entries

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompletionLedger):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"CompletionLedger({self.to_dict()!r})"


__all__ = ["CompletionLedger", "CompletionState"]
