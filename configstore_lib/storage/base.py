"""Storage backend interface definitions.

Defines the StorageBackend abstract class: a strategy that knows where a
storage root lives, how to prepare it and whether writes must be committed
before they are durable. `StorageHolder` is written once against this
class and works with every backend.
"""
from __future__ import annotations
import os
from abc import ABC, abstractmethod
from pathlib import Path, PurePath

from configstore_lib.errors import IOFailure


def normalize_namespace(namespace: str | os.PathLike[str]) -> Path:
    """Return `namespace` as a relative path that stays below its root.

    Raises `ValueError` for empty, absolute or escaping namespaces.
    """
    raw = os.fspath(namespace)
    if not raw:
        raise ValueError("storage namespace must not be empty")
    if PurePath(raw).is_absolute():
        raise ValueError(f"storage namespace must be relative: {raw!r}")
    norm = os.path.normpath(raw)
    if norm == "." or norm == ".." or norm.startswith(".." + os.sep):
        raise ValueError(f"storage namespace escapes its root: {raw!r}")
    return Path(norm)


class StorageBackend(ABC):
    """Abstract storage backend.

    Subclasses provide `initialize`, `root_path` and `storage_path`.
    Backends on journaled media also override `requires_flushing` and
    `commit`; the defaults describe an always-durable medium.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Make the storage root ready for use.

        Must be safe to call repeatedly. Raises `IOFailure` if the working
        directory cannot be created.
        """

    @abstractmethod
    def root_path(self) -> Path:
        """Return the medium-level base location."""

    @abstractmethod
    def storage_path(self) -> Path:
        """Return the working directory for all field and flag operations.

        Always located inside `root_path()`.
        """

    def requires_flushing(self) -> bool:
        """Return True if writes are buffered until `commit` is called."""
        return False

    def commit(self) -> None:
        """Make pending writes durable. No-op for always-durable media."""
        return

    def _ensure_storage_dir(self) -> None:
        path = self.storage_path()
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"failed to create storage directory {path}", exc) from exc
