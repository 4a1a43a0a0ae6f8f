"""Settings for the configuration storage layer.

Settings are read from a YAML file (``data/config/storage_config.yml`` by
default). Every key is optional; a missing file yields the defaults.

Example::

    backend: journaled
    journal_base: ./data/savedata
    journal_label: config
    log_level: INFO
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path("data/config/storage_config.yml")


class StorageSettings(BaseModel):
    backend: Literal["plain", "journaled"] = "plain"
    plain_root: Path = Path("./data/sd")
    journal_base: Path = Path("./data/savedata")
    journal_label: str = "config"
    log_level: str = "WARNING"


def load_settings(path: Optional[Path] = None) -> StorageSettings:
    """Load settings from `path`, falling back to defaults if it does not exist.

    Raises `pydantic.ValidationError` if the file holds invalid values.
    """
    cfg_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not cfg_path.exists():
        logger.debug("No settings file at %s; using defaults", cfg_path)
        return StorageSettings()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    logger.debug("Loaded settings from %s", cfg_path)
    return StorageSettings(**raw)
