"""
Storage abstraction layer.

Provides the album repository used by the lookup service.

Supported backends:
- PostgreSQL
"""

from core.storage.base import (
    AlbumDecodeError,
    AlbumRecord,
    BaseAlbumRepository,
    StorageError,
)
from core.storage.factory import create_album_repository

__all__ = [
    # Value types and errors
    "AlbumRecord",
    "StorageError",
    "AlbumDecodeError",
    # Abstract interface
    "BaseAlbumRepository",
    # Factory functions
    "create_album_repository",
]
