"""Journaled per-user storage backend.

The medium buffers writes until it is explicitly committed, so
`requires_flushing` is True and `commit` forwards to the medium provider.
Each user gets their own directory: the backend resolves the active session
once at construction and stores `<id0>/<id1>/<namespace>` below the mount
point of the medium label.

It is strongly recommended not to touch the mount point directly and to go
through a `StorageHolder` instead, which commits after every mutation.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path

from configstore_lib.platform.interfaces import MediumProviderProtocol, SessionProviderProtocol
from configstore_lib.platform.session import user_storage_segment
from .base import StorageBackend, normalize_namespace

logger = logging.getLogger(__name__)

DEFAULT_JOURNAL_LABEL = "config"


class JournaledSaveDataBackend(StorageBackend):
    def __init__(
        self,
        namespace: str | os.PathLike[str],
        session_provider: SessionProviderProtocol,
        medium: MediumProviderProtocol,
        label: str = DEFAULT_JOURNAL_LABEL,
    ) -> None:
        namespace = normalize_namespace(namespace)
        self._medium = medium
        self._label = label
        # Generate a path for the current user so each user has their own configuration
        self._relative = user_storage_segment(session_provider) / namespace

    @property
    def label(self) -> str:
        return self._label

    def initialize(self) -> None:
        # Result ignored: an already mounted medium is fine
        status = self._medium.mount(self._label)
        logger.debug("mount(%r) returned %s", self._label, status)
        self._ensure_storage_dir()
        logger.info("Journaled storage ready at %s", self.storage_path())

    def root_path(self) -> Path:
        return self._medium.mount_point(self._label)

    def storage_path(self) -> Path:
        return self.root_path() / self._relative

    def requires_flushing(self) -> bool:
        return True

    def commit(self) -> None:
        status = self._medium.commit(self._label)
        if status:
            logger.warning("commit(%r) returned status %s", self._label, status)
        else:
            logger.debug("Committed medium %r", self._label)

    def __repr__(self) -> str:
        return f"JournaledSaveDataBackend(label={self._label!r}, storage_path={str(self.storage_path())!r})"
