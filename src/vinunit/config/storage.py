"""Where vinunit keeps its sqlite database and HTTP cache on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DATA_DIR_ENV: Final[str] = "VINUNIT_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_name: str = "vinunit.db"
    http_cache_name: str = "http_cache.db"

    def _file(self, name: str) -> Path:
        root = self.data_dir.expanduser().resolve()
        root.mkdir(parents=True, exist_ok=True)
        return root / name

    def http_cache_path(self) -> Path:
        return self._file(self.http_cache_name)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self._file(self.database_name)}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    windows = os.name == "nt"
    override = os.getenv("LOCALAPPDATA" if windows else "XDG_DATA_HOME")
    if override:
        return Path(override)
    return Path.home() / ("AppData/Local" if windows else ".local/share")


def get_storage_config() -> StorageConfig:
    configured = os.getenv(DATA_DIR_ENV)
    root = Path(configured) if configured else _platform_data_home() / "vinunit"
    return StorageConfig(data_dir=root)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise the sqlite file under the data directory."""

    uri = os.getenv(DATABASE_URI_ENV) or (storage or get_storage_config()).database_uri()
    return DatabaseConfig(uri=uri)
