"""
Tests for AlbumLookupService.

Covers the outcome policy: found rows pass through, everything else
becomes the sentinel record.
"""

import pytest

from core.storage import AlbumDecodeError, AlbumRecord, StorageError
from services.album_lookup import AlbumLookupService, LookupStatus

from conftest import ABBEY_ROAD, FakeAlbumRepository


SENTINEL = AlbumRecord(id=0, title="N/A", artist="N/A", genre="N/A", year="N/A")


def test_sentinel_record():
    """The not-found placeholder has fixed values."""
    record = AlbumRecord.not_found()

    assert record == SENTINEL
    assert record.is_sentinel
    assert not ABBEY_ROAD.is_sentinel
    assert record.to_dict() == {
        "id": 0,
        "title": "N/A",
        "artist": "N/A",
        "genre": "N/A",
        "year": "N/A",
    }


@pytest.mark.asyncio
async def test_lookup_found(lookup_service, fake_repository):
    """A matching row is returned verbatim."""
    record = await lookup_service.lookup(1)

    assert record == ABBEY_ROAD
    assert fake_repository.calls == [1]


@pytest.mark.asyncio
@pytest.mark.parametrize("album_id", [42, 0, -1, 2 ** 40])
async def test_lookup_missing_returns_sentinel(lookup_service, fake_repository, album_id):
    """Ids without a row give the sentinel; the id is queried as-is."""
    record = await lookup_service.lookup(album_id)

    assert record == SENTINEL
    assert fake_repository.calls == [album_id]


@pytest.mark.asyncio
async def test_find_reports_not_found(lookup_service):
    result = await lookup_service.find(42)

    assert result.status == LookupStatus.NOT_FOUND
    assert result.record == SENTINEL
    assert result.error is None
    assert not result.found


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        StorageError("connection refused"),
        AlbumDecodeError("Column 'title': cannot convert NoneType to str"),
    ],
)
async def test_storage_errors_become_sentinel(error):
    """Query and decode failures are absorbed into the sentinel."""
    repository = FakeAlbumRepository([ABBEY_ROAD], error=error)
    service = AlbumLookupService(repository)

    result = await service.find(1)
    assert result.status == LookupStatus.ERROR
    assert result.record == SENTINEL
    assert str(error) in result.error

    assert await service.lookup(1) == SENTINEL


@pytest.mark.asyncio
async def test_slow_query_times_out():
    """A query slower than the timeout is an error outcome."""
    repository = FakeAlbumRepository([ABBEY_ROAD], delays={1: 0.5})
    service = AlbumLookupService(repository, timeout_seconds=0.05)

    result = await service.find(1)

    assert result.status == LookupStatus.ERROR
    assert result.record == SENTINEL
    assert "timed out" in result.error


@pytest.mark.asyncio
async def test_each_lookup_builds_its_own_record(lookup_service):
    """Results of separate lookups are independent values."""
    first = await lookup_service.find(1)
    missing = await lookup_service.find(99)
    second = await lookup_service.find(1)

    assert first.record == second.record == ABBEY_ROAD
    assert missing.record == SENTINEL
    assert first.record is not missing.record


@pytest.mark.asyncio
async def test_unexpected_errors_propagate():
    """Only storage errors are absorbed; programming errors surface."""
    repository = FakeAlbumRepository(error=RuntimeError("Repository not initialized"))
    service = AlbumLookupService(repository)

    with pytest.raises(RuntimeError):
        await service.lookup(1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
