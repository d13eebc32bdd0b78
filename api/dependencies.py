"""
FastAPI dependencies for dependency injection.

Provides the lookup service and settings to route handlers.
"""

from typing import Optional

from core.config import Settings, get_settings
from services.album_lookup import AlbumLookupService


# Set once during app lifespan; read-only afterwards
_lookup_service: Optional[AlbumLookupService] = None


def set_lookup_service(service: Optional[AlbumLookupService]) -> None:
    """Set the global lookup service instance."""
    global _lookup_service
    _lookup_service = service


async def get_lookup_service() -> AlbumLookupService:
    """
    Dependency that provides the album lookup service.

    Usage:
        @router.get("/album/{album_id}")
        async def get_album(
            album_id: str,
            service: AlbumLookupService = Depends(get_lookup_service),
        ):
            ...
    """
    if _lookup_service is None:
        raise RuntimeError("Lookup service not initialized")
    return _lookup_service


def get_app_settings() -> Settings:
    """Dependency that provides the application settings."""
    return get_settings()
