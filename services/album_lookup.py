"""
Album lookup service.

Sits between the HTTP layer and the repository. Every lookup issues a
single query and always yields a fully populated AlbumRecord: either the
matching row or the sentinel record.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.logging import get_logger
from core.storage import AlbumRecord, BaseAlbumRepository, StorageError


logger = get_logger(__name__)


class LookupStatus(str, Enum):
    """Outcome of a single album lookup."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"          # Query failed, timed out, or row was undecodable


@dataclass(frozen=True)
class LookupResult:
    """
    Result of an album lookup.

    `record` is the sentinel whenever the status is not FOUND.
    """
    status: LookupStatus
    record: AlbumRecord = field(default_factory=AlbumRecord.not_found)
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND


class AlbumLookupService:
    """
    Looks up albums by id.

    The repository is injected and shared; the service itself holds no
    per-request state, so one instance serves all concurrent requests.
    """

    def __init__(
        self,
        repository: BaseAlbumRepository,
        timeout_seconds: Optional[float] = 5.0,
    ):
        """
        Initialize the lookup service.

        Args:
            repository: Album repository (already set up)
            timeout_seconds: Upper bound for one database call; None disables it
        """
        self._repository = repository
        self._timeout_seconds = timeout_seconds

    async def find(self, album_id: int) -> LookupResult:
        """Look up an album and report which outcome occurred."""
        try:
            record = await asyncio.wait_for(
                self._repository.get(album_id),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Album query timed out",
                album_id=album_id,
                timeout_seconds=self._timeout_seconds,
            )
            return LookupResult(
                status=LookupStatus.ERROR,
                error=f"Query timed out after {self._timeout_seconds}s",
            )
        except StorageError as e:
            logger.warning(
                "Album query failed",
                album_id=album_id,
                error=str(e),
            )
            return LookupResult(status=LookupStatus.ERROR, error=str(e))

        if record is None:
            logger.debug("Album not found", album_id=album_id)
            return LookupResult(status=LookupStatus.NOT_FOUND)

        return LookupResult(status=LookupStatus.FOUND, record=record)

    async def lookup(self, album_id: int) -> AlbumRecord:
        """
        Look up an album by id.

        Never raises for storage problems: a failed query, a missing row
        and an undecodable row all produce the sentinel record.
        """
        result = await self.find(album_id)
        return result.record
