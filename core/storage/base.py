"""
Abstract base classes for storage backends.

This module defines the album value type and the contract that the
repository implementation must follow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


SENTINEL_TEXT = "N/A"


class StorageError(Exception):
    """Base exception for album storage operations."""
    pass


class AlbumDecodeError(StorageError):
    """A row was returned but its columns do not fit an AlbumRecord."""
    pass


@dataclass(frozen=True)
class AlbumRecord:
    """
    One row of the `albums` table.

    Instances are immutable and built fresh for every lookup.
    """
    id: int
    title: str
    artist: str
    genre: str
    year: str

    @classmethod
    def not_found(cls) -> "AlbumRecord":
        """The placeholder returned when no genuine row is available."""
        return cls(
            id=0,
            title=SENTINEL_TEXT,
            artist=SENTINEL_TEXT,
            genre=SENTINEL_TEXT,
            year=SENTINEL_TEXT,
        )

    @property
    def is_sentinel(self) -> bool:
        return self == AlbumRecord.not_found()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "genre": self.genre,
            "year": self.year,
        }


class BaseAlbumRepository(ABC):
    """
    Abstract base class for album storage.

    The repository owns the connection pool. It is created once per
    process and shared by all in-flight requests.
    """

    @abstractmethod
    async def setup(self) -> None:
        """
        Open the connection pool and verify the database is reachable.

        Raises whatever the driver raises; callers treat it as fatal.
        """
        pass

    @abstractmethod
    async def get(self, album_id: int) -> Optional[AlbumRecord]:
        """
        Get an album by id.

        Returns None if no row matches.

        Raises:
            StorageError: If the query fails or the row cannot be decoded
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (connections, pools)."""
        pass
