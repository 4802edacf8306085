"""SQLAlchemy adapter package for Daybook."""

from __future__ import annotations

from .mappings import create_all_tables, metadata, record_table
from .store import (
    SqlAlchemyStore,
    StartupError,
    configured_engine,
    is_started,
    open_engine,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "open_engine",
    "record_table",
    "shutdown",
    "startup",
]
