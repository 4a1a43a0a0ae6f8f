from pathlib import Path
from typing import Any, Iterator, Protocol, Union, runtime_checkable


@runtime_checkable
class StorageBackendProtocol(Protocol):
    """Storage backend protocol mirroring `configstore_lib.storage.StorageBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `configstore_lib.storage.base` (idempotent `initialize`,
    `storage_path` inside `root_path`, no-op `commit` on durable media).
    """

    def initialize(self) -> None: ...

    def root_path(self) -> Path: ...

    def storage_path(self) -> Path: ...

    def requires_flushing(self) -> bool: ...

    def commit(self) -> None: ...


@runtime_checkable
class StorageHolderProtocol(Protocol):
    """Public surface of `StorageHolder` that consumers rely on."""

    def get_field(self, path: Any, kind: Any = ...) -> Any: ...

    def set_field(self, path: Any, contents: Union[bytes, str]) -> None: ...

    def remove_field(self, path: Any) -> None: ...

    def get_flag(self, path: Any) -> bool: ...

    def set_flag(self, path: Any, flag: bool) -> None: ...

    def rename(self, src: Any, dst: Any) -> None: ...

    def read_dir(self) -> Iterator[Any]: ...

    def clear_storage(self) -> None: ...

    def delete_storage(self) -> None: ...

    def flush(self) -> None: ...
