"""Per-user storage path resolution."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Tuple

from configstore_lib.platform.interfaces import SessionProviderProtocol
from configstore_lib.errors import SessionUnavailable

logger = logging.getLogger(__name__)


def current_user_id(provider: SessionProviderProtocol) -> Tuple[int, int]:
    """Return the two-part identifier of the active user.

    Opens the current session, reads its identifier and closes it again.
    The handle never leaves this function. Raises `SessionUnavailable` if
    no session can be opened.
    """
    handle = provider.open_current_session()
    if handle is None:
        raise SessionUnavailable("no active user session could be opened")
    try:
        high, low = provider.session_identifier(handle)
    finally:
        provider.close_session(handle)
    del handle
    logger.debug("Resolved user identifier %d/%d", high, low)
    return int(high), int(low)


def user_storage_segment(provider: SessionProviderProtocol) -> Path:
    """Return the relative path `<id0>/<id1>` for the active user."""
    high, low = current_user_id(provider)
    return Path(str(high)) / str(low)
