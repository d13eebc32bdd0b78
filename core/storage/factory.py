"""
Storage factory for creating the album repository.

Turns the connection descriptor loaded at startup into a repository
instance configured from the service settings.
"""

from typing import TYPE_CHECKING

from core.logging import get_logger
from core.storage.base import BaseAlbumRepository


if TYPE_CHECKING:
    from core.config import DatabaseConfig, Settings


logger = get_logger(__name__)


def create_album_repository(
    database_config: "DatabaseConfig",
    settings: "Settings",
) -> BaseAlbumRepository:
    """
    Create an album repository instance.

    Args:
        database_config: Connection descriptor from the config file
        settings: Application settings

    Returns:
        Configured repository instance (not yet initialized)
    """
    from core.storage.postgres import PostgresAlbumRepository

    logger.info(
        "Creating PostgreSQL album repository",
        host=database_config.host,
        port=database_config.port,
        database=database_config.database,
    )
    return PostgresAlbumRepository(
        connection_string=database_config.async_connection_string,
        # Equivalent of sslmode=disable for asyncpg
        connect_args={"ssl": False},
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )
