"""
Pytest configuration and fixtures.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Iterable, Optional

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Set test environment
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("STATUS_MODE", "strict")

from core.storage import AlbumRecord, BaseAlbumRepository  # noqa: E402
from services.album_lookup import AlbumLookupService  # noqa: E402


ABBEY_ROAD = AlbumRecord(
    id=1,
    title="Abbey Road",
    artist="The Beatles",
    genre="Rock",
    year="1969",
)

KIND_OF_BLUE = AlbumRecord(
    id=2,
    title="Kind of Blue",
    artist="Miles Davis",
    genre="Jazz",
    year="1959",
)


class FakeAlbumRepository(BaseAlbumRepository):
    """
    In-memory repository that records every call.

    Args:
        albums: Rows to serve
        error: Exception raised by every get()
        delays: Per-id seconds to wait before answering
    """

    def __init__(
        self,
        albums: Iterable[AlbumRecord] = (),
        error: Optional[Exception] = None,
        delays: Optional[dict[int, float]] = None,
    ):
        self.albums = {album.id: album for album in albums}
        self.error = error
        self.delays = delays or {}
        self.calls: list[int] = []
        self.setup_called = False
        self.closed = False

    async def setup(self) -> None:
        self.setup_called = True

    async def get(self, album_id: int) -> Optional[AlbumRecord]:
        self.calls.append(album_id)
        delay = self.delays.get(album_id)
        if delay:
            await asyncio.sleep(delay)
        if self.error is not None:
            raise self.error
        return self.albums.get(album_id)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_repository():
    """Repository holding two albums."""
    return FakeAlbumRepository([ABBEY_ROAD, KIND_OF_BLUE])


@pytest.fixture
def lookup_service(fake_repository):
    """Lookup service over the fake repository."""
    return AlbumLookupService(fake_repository, timeout_seconds=1.0)
