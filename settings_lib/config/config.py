from __future__ import annotations
from pathlib import Path
from typing import Literal, Optional
import logging

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/settings_config.yml')


class SettingsFileConfig(BaseModel):
    """Options used to build a settings accessor.

    `path` is the settings file path for the `file` backend and the
    identity key for the `memory` backend.
    """
    backend: Literal['file', 'memory'] = 'file'
    path: str = 'data/settings.cfg'
    flush_threshold: int = Field(default=0, ge=0)
    chunk_size: int = Field(default=4096, gt=0)
    fsync: bool = True
    log_level: str = 'WARNING'


def load_config(config_path: Optional[Path | str] = None) -> SettingsFileConfig:
    """Load a `SettingsFileConfig` from a YAML file.

    A missing file yields the defaults. Invalid values raise pydantic's
    `ValidationError`.
    """
    cfg_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        logger.debug('Settings config %s not found; using defaults', cfg_path)
        return SettingsFileConfig()
    with cfg_path.open('r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f'{cfg_path} must contain a mapping, got {type(raw).__name__}')
    cfg = SettingsFileConfig(**raw)
    logger.debug('Loaded settings config from %s: backend=%s path=%s', cfg_path, cfg.backend, cfg.path)
    return cfg
