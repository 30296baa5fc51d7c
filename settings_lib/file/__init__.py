"""Settings file package: the file contract and its buffered accessor."""
from __future__ import annotations
from typing import Any, Optional

from settings_lib.config.config import SettingsFileConfig
from settings_lib.medium import FileMedium, MemoryMedium, MemoryStore
from .accessor import SettingsAccessor
from .base import SettingsFile
from .errors import InvalidStateError, SettingsFileError, SettingsIOError
from .interfaces import SettingsFileProtocol
from .scoped import check, iter_lines, reading, writing
from .types import FileStatus, SettingsFileResult


def create_settings_file(config: Optional[SettingsFileConfig] = None, *,
                         store: Optional[MemoryStore] = None, **overrides: Any) -> SettingsAccessor:
    """Build a SettingsAccessor from configuration.

    Keyword `overrides` replace fields of `config` (or of the defaults).
    The `memory` backend uses `store`, creating a fresh `MemoryStore` when
    none is given.
    """
    cfg = config or SettingsFileConfig()
    if overrides:
        cfg = SettingsFileConfig(**{**cfg.model_dump(), **overrides})
    if cfg.backend == 'memory':
        medium = MemoryMedium(store if store is not None else MemoryStore(), cfg.path)
    else:
        medium = FileMedium(cfg.path, fsync=cfg.fsync)
    return SettingsAccessor(medium, flush_threshold=cfg.flush_threshold, chunk_size=cfg.chunk_size)


__all__ = [
    "SettingsFile",
    "SettingsFileProtocol",
    "SettingsAccessor",
    "SettingsFileResult",
    "FileStatus",
    "SettingsFileError",
    "InvalidStateError",
    "SettingsIOError",
    "check",
    "reading",
    "writing",
    "iter_lines",
    "create_settings_file",
]
