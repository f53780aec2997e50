"""Data storage configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import get_env

DEFAULT_DATA_DIR: Final[str] = "data"
SNAPSHOT_FILENAME: Final[str] = "targets.json"
ADDITIONS_FILENAME: Final[str] = "new-targets.json"
DATA_DIR_ENV_VAR: Final[str] = "SCOPEWATCH_DATA_DIR"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    snapshot_filename: str = SNAPSHOT_FILENAME
    additions_filename: str = ADDITIONS_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def snapshot_path(self) -> Path:
        return self.resolve_data_dir() / self.snapshot_filename

    def additions_path(self) -> Path:
        return self.resolve_data_dir() / self.additions_filename


def get_storage_config(*, data_dir: str | Path | None = None) -> StorageConfig:
    """Resolve storage settings; the environment wins over ``data_dir``."""

    env_dir = get_env(DATA_DIR_ENV_VAR)
    if env_dir:
        return StorageConfig(data_dir=Path(env_dir))
    return StorageConfig(data_dir=Path(data_dir or DEFAULT_DATA_DIR))
