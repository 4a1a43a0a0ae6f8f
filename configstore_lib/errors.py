"""Error types raised by the configuration storage layer.

Recoverable failures derive from `ConfigError` and are returned to the
caller. Failures that leave no usable storage (no user session, backend
that could not be initialized) derive from `FatalStorageError` instead so
they are not swallowed by handlers written for ordinary config errors.
"""
from __future__ import annotations
from typing import Optional


class ConfigError(Exception):
    """Base class for recoverable storage errors."""


class IOFailure(ConfigError):
    """An operation on the underlying files failed.

    The underlying `OSError` (when there is one) is available as `error` and
    is also chained as `__cause__`.
    """

    def __init__(self, message: str, error: Optional[OSError] = None) -> None:
        super().__init__(message)
        self.error = error


class FieldMissing(ConfigError, KeyError):
    """The requested field could not be found."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return Exception.__str__(self)


class ParseFailure(ConfigError, ValueError):
    """The field exists but its content could not be converted."""


class FatalStorageError(RuntimeError):
    """Storage cannot be used at all; there is no recovery path."""


class StorageUnavailable(FatalStorageError):
    """The storage backend failed to initialize."""


class SessionUnavailable(FatalStorageError):
    """No active user session could be opened."""
