"""Pokrok habit tracking core."""

from __future__ import annotations

from .config import BaseConfig, TestingConfig

__all__ = ["BaseConfig", "TestingConfig"]
