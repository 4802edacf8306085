"""Where Daybook keeps its local database and where it finds the shared copy."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import require_env_var

APP_DIR_NAME: Final[str] = "daybook"
DEFAULT_DB_FILENAME: Final[str] = "daybook.db"

DATA_DIR_ENV: Final[str] = "DAYBOOK_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DAYBOOK_DATABASE_URI"
REMOTE_URI_ENV: Final[str] = "DAYBOOK_REMOTE_URI"


def platform_data_home() -> Path:
    """Per-user data root: ``%LOCALAPPDATA%`` on Windows, ``$XDG_DATA_HOME`` elsewhere."""

    if os.name == "nt":
        variable, fallback = "LOCALAPPDATA", Path.home() / "AppData" / "Local"
    else:
        variable, fallback = "XDG_DATA_HOME", Path.home() / ".local" / "share"
    configured = os.getenv(variable)
    return Path(configured) if configured else fallback


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_file(self) -> Path:
        return self.data_dir / self.database_filename

    def sqlite_uri(self) -> str:
        """URI of the local database file; creates ``data_dir`` on first use."""

        self.data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{self.database_file}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """The local database every collection is loaded from and saved to."""

    uri: str


@dataclass(frozen=True, slots=True)
class RemoteConfig:
    """Where the shared (remote) copy of every collection lives."""

    uri: str


def get_storage_config() -> StorageConfig:
    configured = os.getenv(DATA_DIR_ENV)
    base = Path(configured) if configured else platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=base.expanduser().resolve())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    override = os.getenv(DATABASE_URI_ENV, "").strip()
    if override:
        return DatabaseConfig(uri=override)
    return DatabaseConfig(uri=(storage or get_storage_config()).sqlite_uri())


def get_remote_config() -> RemoteConfig:
    return RemoteConfig(uri=require_env_var(REMOTE_URI_ENV))
