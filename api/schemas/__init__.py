"""
Pydantic schemas for API responses.
"""

from api.schemas.album import AlbumResponse

__all__ = ["AlbumResponse"]
