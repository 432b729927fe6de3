"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()

STATS_ANCHORS = ("habit", "account")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Pokrok"
    DB_FILENAME = "pokrok.db"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("POKROK_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("POKROK_DATABASE_URL", self._build_sqlite_url())

        # Lower bound of the streak window: the habit's own start or the owner's signup day.
        self.STATS_ANCHOR = os.getenv("POKROK_STATS_ANCHOR", "habit").strip().lower()
        if self.STATS_ANCHOR not in STATS_ANCHORS:
            raise ValueError(
                f"POKROK_STATS_ANCHOR must be one of {', '.join(STATS_ANCHORS)}; "
                f"got {self.STATS_ANCHOR!r}"
            )

        # Python weekday numbering: 0 = Monday ... 6 = Sunday.
        self.FIRST_WEEKDAY = _env_int("POKROK_FIRST_WEEKDAY", 0)
        if not 0 <= self.FIRST_WEEKDAY <= 6:
            raise ValueError("POKROK_FIRST_WEEKDAY must be between 0 (Monday) and 6 (Sunday).")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("POKROK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection, otherwise every session sees an empty database.
            return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class TestingConfig(BaseConfig):
    """Configuration for tests: in-memory database unless overridden."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = os.getenv("POKROK_TEST_DATABASE_URL", "sqlite://")
