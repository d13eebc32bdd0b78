"""
Application services.

Exports the album lookup service and its result types.
"""

from services.album_lookup import AlbumLookupService, LookupResult, LookupStatus

__all__ = ["AlbumLookupService", "LookupResult", "LookupStatus"]
