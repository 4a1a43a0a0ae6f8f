"""Storage abstraction package for configstore."""
from __future__ import annotations
import logging
import os
from typing import Optional

from configstore_lib.errors import (
    ConfigError,
    FatalStorageError,
    FieldMissing,
    IOFailure,
    ParseFailure,
    SessionUnavailable,
    StorageUnavailable,
)
from configstore_lib.platform.interfaces import MediumProviderProtocol, SessionProviderProtocol
from .base import StorageBackend
from .file_backend import PlainDirectoryBackend
from .journaled_backend import JournaledSaveDataBackend
from .holder import StorageHolder

logger = logging.getLogger(__name__)

__all__ = [
    "StorageBackend",
    "PlainDirectoryBackend",
    "JournaledSaveDataBackend",
    "StorageHolder",
    "acquire_storage",
    "ConfigError",
    "IOFailure",
    "FieldMissing",
    "ParseFailure",
    "FatalStorageError",
    "StorageUnavailable",
    "SessionUnavailable",
]


def acquire_storage(
    namespace: str | os.PathLike[str],
    backend: Optional[str] = None,
    *,
    settings=None,
    session_provider: Optional[SessionProviderProtocol] = None,
    medium: Optional[MediumProviderProtocol] = None,
) -> StorageHolder:
    """Create the backend selected by `backend` and return an initialized holder.

    `backend` is ``"plain"`` or ``"journaled"`` and defaults to the value
    from `settings` (loaded from the settings file when not given). The
    journaled backend uses the host session and a directory-based medium
    unless collaborators are injected.

    The returned holder is meant to be used as a context manager so the
    final commit happens on every exit path:

        with acquire_storage("my_plugin") as storage:
            storage.set_flag("first_boot_done", True)
    """
    if settings is None:
        from configstore_lib.config.settings import load_settings
        settings = load_settings()

    kind = (backend or settings.backend).lower()
    if kind == "plain":
        storage: StorageBackend = PlainDirectoryBackend(namespace, root=settings.plain_root)
    elif kind == "journaled":
        from configstore_lib.platform.local import DirectoryMedium, LocalSessionProvider
        storage = JournaledSaveDataBackend(
            namespace,
            session_provider=session_provider or LocalSessionProvider(),
            medium=medium or DirectoryMedium(settings.journal_base),
            label=settings.journal_label,
        )
    else:
        raise ValueError(f"Unknown storage backend {backend!r}; expected 'plain' or 'journaled'")

    logger.debug("Acquiring %r", storage)
    return StorageHolder(storage)
