"""Host platform collaborators: user sessions and journaled media."""

from .interfaces import MediumProviderProtocol, SessionProviderProtocol
from .local import DirectoryMedium, LocalSessionProvider
from .session import current_user_id, user_storage_segment

__all__ = [
    "MediumProviderProtocol",
    "SessionProviderProtocol",
    "DirectoryMedium",
    "LocalSessionProvider",
    "current_user_id",
    "user_storage_segment",
]
