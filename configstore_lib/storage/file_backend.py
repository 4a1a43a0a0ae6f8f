"""Plain directory storage backend.

Stores fields and flags under `<root>/<namespace>/` on a medium where every
write is durable as soon as it returns, so no commit step is needed.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path

from .base import StorageBackend, normalize_namespace

logger = logging.getLogger(__name__)

DEFAULT_PLAIN_ROOT = Path("./data/sd")


class PlainDirectoryBackend(StorageBackend):
    def __init__(self, namespace: str | os.PathLike[str], root: str | Path = DEFAULT_PLAIN_ROOT) -> None:
        self._namespace = normalize_namespace(namespace)
        self._root = Path(root)

    def initialize(self) -> None:
        self._ensure_storage_dir()
        logger.info("Plain storage ready at %s", self.storage_path())

    def root_path(self) -> Path:
        return self._root

    def storage_path(self) -> Path:
        return self._root / self._namespace

    def __repr__(self) -> str:
        return f"PlainDirectoryBackend(storage_path={str(self.storage_path())!r})"
