"""Host implementations of the session and medium collaborators.

These let the journaled backend run on an ordinary machine: the session is
the logged-in OS user and each medium label is a directory under a base
path whose contents are fsync'ed on commit.
"""
from __future__ import annotations
import getpass
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Set, Tuple

logger = logging.getLogger(__name__)

_U64_MASK = (1 << 64) - 1

# Status codes returned by DirectoryMedium
STATUS_OK = 0
STATUS_ALREADY_MOUNTED = 1
STATUS_NOT_MOUNTED = 2


@dataclass
class LocalSession:
    user: str
    closed: bool = False


class LocalSessionProvider:
    """Session provider backed by the operating-system login name.

    The identifier is the 128-bit name-based UUID of the user split into
    two unsigned 64-bit halves, so it is stable across runs.
    """

    def __init__(self, user: Optional[str] = None) -> None:
        self._user = user

    def open_current_session(self) -> Optional[LocalSession]:
        user = self._user
        if user is None:
            try:
                user = getpass.getuser()
            except (KeyError, OSError):
                logger.warning("Unable to determine the current OS user")
                return None
        if not user:
            return None
        return LocalSession(user=user)

    def session_identifier(self, handle: LocalSession) -> Tuple[int, int]:
        if handle.closed:
            raise ValueError("session handle is closed")
        value = uuid.uuid5(uuid.NAMESPACE_URL, f"user:{handle.user}").int
        return (value >> 64) & _U64_MASK, value & _U64_MASK

    def close_session(self, handle: LocalSession) -> None:
        handle.closed = True


class DirectoryMedium:
    """Journaled medium emulated with plain directories.

    Each label is mounted at `<base_dir>/<label>`. `commit` flushes every
    file and directory below the mount point to disk.
    """

    def __init__(self, base_dir: str | Path = "./data/savedata") -> None:
        self.base_dir = Path(base_dir)
        self._mounted: Set[str] = set()

    def mount_point(self, label: str) -> Path:
        return self.base_dir / label

    def mount(self, label: str) -> int:
        if label in self._mounted:
            return STATUS_ALREADY_MOUNTED
        self.mount_point(label).mkdir(parents=True, exist_ok=True)
        self._mounted.add(label)
        logger.info("Mounted medium %r at %s", label, self.mount_point(label))
        return STATUS_OK

    def commit(self, label: str) -> int:
        if label not in self._mounted:
            return STATUS_NOT_MOUNTED
        root = self.mount_point(label)
        for dirpath, _dirnames, filenames in os.walk(root):
            for name in filenames:
                _fsync_path(os.path.join(dirpath, name), os.O_RDONLY)
            _fsync_path(dirpath, os.O_RDONLY | getattr(os, "O_DIRECTORY", 0))
        return STATUS_OK


def _fsync_path(path: str, flags: int) -> None:
    try:
        fd = os.open(path, flags)
    except OSError:
        # entry vanished between listing and opening, or directories cannot
        # be opened on this platform
        return
    try:
        os.fsync(fd)
    except OSError:
        logger.debug("fsync not supported for %s", path)
    finally:
        os.close(fd)
