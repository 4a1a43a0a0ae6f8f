"""Field and flag access on top of a storage backend.

`StorageHolder` owns one backend for its whole lifetime. Every path given
to it is relative to the backend's `storage_path()`; paths that would leave
that directory are rejected. After each successful mutation the holder
commits the backend if the medium requires it, so a call that returned is
durable. Closing the holder, leaving its `with` block, or dropping the last
reference to it commits once more.

Usage:

    with acquire_storage("my_plugin") as storage:
        storage.set_field("level", "3")
        level = storage.get_field("level", int)
"""
from __future__ import annotations
import logging
import os
import shutil
import weakref
from pathlib import Path, PurePath
from typing import Any, Callable, Iterator, TypeVar, Union, overload

import yaml

from configstore_lib.errors import ConfigError, FieldMissing, IOFailure, ParseFailure, StorageUnavailable
from .base import StorageBackend
from .serializer import Serializer, get_serializer

logger = logging.getLogger(__name__)

T = TypeVar("T")
PathArg = Union[str, "os.PathLike[str]"]
Contents = Union[str, bytes, bytearray, memoryview]

# Errors a codec may raise for content or values it cannot handle
_CODEC_ERRORS = (ValueError, TypeError, AttributeError, yaml.YAMLError)


def _parse_exact(kind: Callable[[str], T], text: str) -> T:
    # values are stored verbatim; padding is not part of a number or literal
    if text != text.strip():
        raise ValueError(f"unexpected surrounding whitespace in {text!r}")
    return kind(text)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"invalid boolean literal {text!r}")


class StorageHolder:
    def __init__(self, backend: StorageBackend) -> None:
        try:
            backend.initialize()
        except ConfigError as exc:
            raise StorageUnavailable(f"failed to initialize {backend!r}") from exc
        self._backend = backend
        self._closed = False
        # Commit once more when the holder is closed or collected, whichever comes first
        self._finalizer = weakref.finalize(self, backend.commit) if backend.requires_flushing() else None

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    def storage_path(self) -> Path:
        return self._backend.storage_path()

    def _full_path(self, path: PathArg) -> Path:
        raw = os.fspath(path)
        if not raw or PurePath(raw).is_absolute():
            raise IOFailure(f"invalid storage path {raw!r}")
        norm = os.path.normpath(raw)
        if norm in (".", "..") or norm.startswith(".." + os.sep):
            raise IOFailure(f"path {raw!r} is outside of the storage directory")
        return self._backend.storage_path() / norm

    def _commit_if_needed(self) -> None:
        if self._backend.requires_flushing():
            self._backend.commit()

    # -- raw file primitives -------------------------------------------------

    def create(self, path: PathArg) -> None:
        """Create an empty file at `path`, truncating an existing one."""
        full_path = self._full_path(path)
        try:
            full_path.write_bytes(b"")
        except OSError as exc:
            raise IOFailure(f"failed to create {full_path}", exc) from exc

    def remove_file(self, path: PathArg) -> None:
        full_path = self._full_path(path)
        try:
            full_path.unlink()
        except OSError as exc:
            raise IOFailure(f"failed to remove {full_path}", exc) from exc
        logger.debug("Removed %s", full_path)
        self._commit_if_needed()

    def rename(self, src: PathArg, dst: PathArg) -> None:
        """Rename a field or a flag to another name."""
        full_from = self._full_path(src)
        full_to = self._full_path(dst)
        try:
            full_from.replace(full_to)
        except OSError as exc:
            raise IOFailure(f"failed to rename {full_from} to {full_to}", exc) from exc
        logger.debug("Renamed %s to %s", full_from, full_to)
        self._commit_if_needed()

    def read_dir(self) -> Iterator[os.DirEntry]:
        """Iterate lazily over the entries directly under the storage directory."""
        path = self._backend.storage_path()
        try:
            path.stat()
        except OSError as exc:
            raise IOFailure(f"failed to list {path}", exc) from exc
        return self._iter_entries(path)

    @staticmethod
    def _iter_entries(path: Path) -> Iterator[os.DirEntry]:
        try:
            entries = os.scandir(path)
        except OSError as exc:
            raise IOFailure(f"failed to list {path}", exc) from exc
        with entries:
            yield from entries

    def read_to_string(self, path: PathArg) -> str:
        full_path = self._full_path(path)
        try:
            return full_path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            raise FieldMissing(f"field {os.fspath(path)!r} does not exist") from None
        except OSError as exc:
            raise IOFailure(f"failed to read {full_path}", exc) from exc
        except UnicodeDecodeError as exc:
            raise IOFailure(f"{full_path} is not valid UTF-8") from exc

    def write(self, path: PathArg, contents: Contents) -> None:
        """Replace the content of `path`. `str` values are stored as UTF-8.

        The data goes to a temporary file that is fsync'ed and then renamed
        over the target.
        """
        if isinstance(contents, str):
            data = contents.encode("utf-8")
        elif isinstance(contents, (bytes, bytearray, memoryview)):
            data = bytes(contents)
        else:
            raise TypeError(f"field contents must be str or bytes, not {type(contents).__name__}")
        full_path = self._full_path(path)
        tmp = full_path.with_suffix(full_path.suffix + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(full_path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise IOFailure(f"failed to write {full_path}", exc) from exc
        logger.debug("Wrote %d bytes to %s", len(data), full_path)
        self._commit_if_needed()

    # -- fields ---------------------------------------------------------------

    @overload
    def get_field(self, path: PathArg) -> str: ...

    @overload
    def get_field(self, path: PathArg, kind: Callable[[str], T]) -> T: ...

    def get_field(self, path, kind=str):
        """Provide the value of the field if it exists.

        `kind` converts the text content to the desired type (`int`,
        `float`, `Decimal`, ...). `bool` only accepts `true` and `false`.
        Content is converted verbatim: for any `kind` other than `str`,
        leading or trailing whitespace (including a final newline) is a
        `ParseFailure`.
        Raises `FieldMissing` if the field cannot be read and `ParseFailure`
        if the conversion fails.
        """
        try:
            text = self.read_to_string(path)
        except ConfigError as exc:
            raise FieldMissing(f"field {os.fspath(path)!r} could not be read") from exc
        try:
            if kind is str:
                return text
            return _parse_exact(_parse_bool if kind is bool else kind, text)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ParseFailure(f"field {os.fspath(path)!r} could not be converted with {kind!r}") from exc

    def set_field(self, path: PathArg, contents: Contents) -> None:
        """Create a field in the configuration and assign it the value provided."""
        self.write(path, contents)

    def remove_field(self, path: PathArg) -> None:
        """Remove a field from the configuration, along with its value."""
        self.remove_file(path)

    # -- flags ----------------------------------------------------------------

    def get_flag(self, path: PathArg) -> bool:
        """Check if a flag is enabled in the configuration."""
        try:
            full_path = self._full_path(path)
        except IOFailure:
            return False
        return full_path.exists()

    def set_flag(self, path: PathArg, flag: bool) -> None:
        """Enable the flag if `flag` is true, otherwise disable it.

        Enabling an enabled flag is fine. Disabling a flag that is not set
        raises `IOFailure`; check `get_flag` first if that can happen.
        """
        if flag:
            self.create(path)
            self._commit_if_needed()
        else:
            self.remove_file(path)

    # -- whole storage --------------------------------------------------------

    def clear_storage(self) -> None:
        """Delete every file in the storage directory.

        Be absolutely sure this is what you want before calling it. The
        directory itself is kept. A subdirectory raises `IOFailure`.
        """
        try:
            for entry in self.read_dir():
                if entry.is_dir(follow_symlinks=False):
                    raise IOFailure(f"unexpected directory {entry.path} in storage")
                try:
                    os.unlink(entry.path)
                except OSError as exc:
                    raise IOFailure(f"failed to remove {entry.path}", exc) from exc
        finally:
            self._commit_if_needed()
        logger.info("Cleared storage at %s", self.storage_path())

    def delete_storage(self) -> None:
        """Remove the storage directory and everything in it."""
        path = self._backend.storage_path()
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise IOFailure(f"failed to delete {path}", exc) from exc
        finally:
            self._commit_if_needed()
        logger.info("Deleted storage at %s", path)

    def flush(self) -> None:
        """Commit pending writes if the backend needs it. Always safe to call."""
        self._commit_if_needed()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._finalizer is not None:
            # runs backend.commit once and detaches from garbage collection
            self._finalizer()
        else:
            self.flush()

    def __enter__(self) -> "StorageHolder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- codec extensions -----------------------------------------------------

    def get_field_as(self, path: PathArg, codec: Union[str, Serializer]) -> Any:
        """Provide the value of the field deserialized with `codec`."""
        serializer = get_serializer(codec)
        try:
            text = self.read_to_string(path)
        except ConfigError as exc:
            raise FieldMissing(f"field {os.fspath(path)!r} could not be read") from exc
        try:
            return serializer.load(text.encode("utf-8"))
        except _CODEC_ERRORS as exc:
            raise ParseFailure(f"field {os.fspath(path)!r} could not be decoded") from exc

    def set_field_as(self, path: PathArg, value: Any, codec: Union[str, Serializer]) -> None:
        """Create a field holding `value` serialized with `codec`."""
        serializer = get_serializer(codec)
        try:
            data = serializer.dump(value)
        except _CODEC_ERRORS as exc:
            raise ParseFailure(f"value for field {os.fspath(path)!r} could not be encoded") from exc
        self.write(path, data)

    def get_field_json(self, path: PathArg) -> Any:
        return self.get_field_as(path, "json")

    def set_field_json(self, path: PathArg, value: Any) -> None:
        self.set_field_as(path, value, "json")

    def get_field_yaml(self, path: PathArg) -> Any:
        return self.get_field_as(path, "yaml")

    def set_field_yaml(self, path: PathArg, value: Any) -> None:
        self.set_field_as(path, value, "yaml")

    def get_field_toml(self, path: PathArg) -> Any:
        return self.get_field_as(path, "toml")

    def set_field_toml(self, path: PathArg, value: Any) -> None:
        self.set_field_as(path, value, "toml")

    def __repr__(self) -> str:
        return f"StorageHolder({self._backend!r})"
