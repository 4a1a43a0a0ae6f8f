from pathlib import Path
from typing import Any, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class SessionProviderProtocol(Protocol):
    """Host user-session interface used to identify the active user.

    Callers must use the three methods strictly in open -> read -> close
    order and must not keep the handle after closing it. See
    `configstore_lib.platform.session.current_user_id`.
    """

    def open_current_session(self) -> Optional[Any]: ...

    def session_identifier(self, handle: Any) -> Tuple[int, int]: ...

    def close_session(self, handle: Any) -> None: ...


@runtime_checkable
class MediumProviderProtocol(Protocol):
    """Mount/commit primitives of a journaled storage medium.

    `mount` and `commit` return a platform status code where 0 means
    success. Mounting an already-mounted label is not an error for callers.
    """

    def mount(self, label: str) -> int: ...

    def commit(self, label: str) -> int: ...

    def mount_point(self, label: str) -> Path: ...
