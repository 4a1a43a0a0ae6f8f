from pathlib import Path
from typing import Any, List, Optional, Tuple


class FakeSession:
    def __init__(self, uid: Tuple[int, int]):
        self.uid = uid


class FakeSessionProvider:
    """Session provider that records the order of calls made on it.

    With `available=False` no session can be opened.
    """

    def __init__(self, uid: Tuple[int, int] = (1, 2), available: bool = True):
        self.uid = uid
        self.available = available
        self.calls: List[str] = []
        self.handles: List[FakeSession] = []

    def open_current_session(self) -> Optional[FakeSession]:
        self.calls.append('open')
        if not self.available:
            return None
        handle = FakeSession(self.uid)
        self.handles.append(handle)
        return handle

    def session_identifier(self, handle: Any) -> Tuple[int, int]:
        self.calls.append('read')
        return handle.uid

    def close_session(self, handle: Any) -> None:
        self.calls.append('close')


class FakeMedium:
    """Journaled medium stand-in that counts mounts and commits."""

    def __init__(self, base_dir: Path, commit_status: int = 0):
        self.base_dir = Path(base_dir)
        self.commit_status = commit_status
        self.mounts: List[str] = []
        self.commits: List[str] = []

    def mount(self, label: str) -> int:
        already = label in self.mounts
        self.mounts.append(label)
        self.mount_point(label).mkdir(parents=True, exist_ok=True)
        return 1 if already else 0

    def commit(self, label: str) -> int:
        self.commits.append(label)
        return self.commit_status

    def mount_point(self, label: str) -> Path:
        return self.base_dir / label
