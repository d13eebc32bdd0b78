"""
PostgreSQL storage backend implementation.

Provides the album repository on top of a SQLAlchemy async engine
(asyncpg driver). Queries are raw SQL with bound parameters.
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional, Sequence

from sqlalchemy import BigInteger, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.logging import get_logger
from core.storage.base import AlbumDecodeError, AlbumRecord, BaseAlbumRepository, StorageError


logger = get_logger(__name__)

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

# The id is bound as bigint so ids outside the int4 range match no row
# instead of failing to encode
SELECT_ALBUM = text(
    "SELECT id, title, artist, genre, year FROM albums"
    " WHERE id = CAST(:album_id AS BIGINT)"
).bindparams(bindparam("album_id", type_=BigInteger))


def format_float(value: float) -> str:
    """
    Shortest round-tripping text for a float.

    Laid out the way SQL drivers for Go render floats scanned into text:
    exponent form when the decimal exponent is below -4 or at least 6
    (1234567.0 -> "1.234567e+06"), plain digits otherwise (1969.0 -> "1969").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    point = len(digits) + exponent
    decimal_exponent = point - 1

    if decimal_exponent < -4 or decimal_exponent >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        exp_sign = "-" if decimal_exponent < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(decimal_exponent):02d}"

    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{prefix}{digits}{'0' * (point - len(digits))}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def _decode_int(column: str, value: Any) -> int:
    if isinstance(value, bool):
        raise AlbumDecodeError(f"Column {column!r}: cannot convert bool to int")
    if isinstance(value, int):
        return value
    source_type = type(value).__name__
    if isinstance(value, (bytes, float, Decimal)):
        # Integral floats convert; 1.5 and 1e+06 do not
        value = _decode_text(column, value)
    if isinstance(value, str) and _INTEGER_TEXT.fullmatch(value):
        return int(value)
    raise AlbumDecodeError(
        f"Column {column!r}: cannot convert {source_type} to int"
    )


def _decode_text(column: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AlbumDecodeError(f"Column {column!r}: {e}") from e
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return str(value)
    raise AlbumDecodeError(
        f"Column {column!r}: cannot convert {type(value).__name__} to str"
    )


def decode_album_row(row: Sequence[Any]) -> AlbumRecord:
    """
    Map a (id, title, artist, genre, year) row onto an AlbumRecord.

    Raises:
        AlbumDecodeError: If the row has the wrong arity or a column
            cannot be converted (NULLs included)
    """
    if len(row) != 5:
        raise AlbumDecodeError(f"Expected 5 columns, got {len(row)}")

    album_id, title, artist, genre, year = row
    return AlbumRecord(
        id=_decode_int("id", album_id),
        title=_decode_text("title", title),
        artist=_decode_text("artist", artist),
        genre=_decode_text("genre", genre),
        year=_decode_text("year", year),
    )


class PostgresAlbumRepository(BaseAlbumRepository):
    """
    PostgreSQL-based album repository.

    Uses SQLAlchemy async for database operations. The engine's pool is
    safe for concurrent use; every lookup checks out its own session.
    """

    def __init__(
        self,
        connection_string: str,
        connect_args: Optional[dict[str, Any]] = None,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ):
        """
        Initialize PostgreSQL album repository.

        Args:
            connection_string: SQLAlchemy async connection URI (asyncpg format)
            connect_args: Extra keyword arguments for the driver's connect()
            echo: Whether to echo SQL statements
            pool_size: Persistent connections kept in the pool
            max_overflow: Extra connections allowed under load
        """
        self._connection_string = connection_string
        self._connect_args = connect_args or {}
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def setup(self) -> None:
        """Create the engine and check that the database answers."""
        self._engine = create_async_engine(
            self._connection_string,
            echo=self._echo,
            pool_pre_ping=True,
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            connect_args=self._connect_args,
        )

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        logger.info("PostgreSQL album repository initialized")

    def _get_session(self) -> AsyncSession:
        """Get a new session."""
        if self._session_factory is None:
            raise RuntimeError(
                "Repository not initialized. Call setup() first."
            )
        return self._session_factory()

    async def get(self, album_id: int) -> Optional[AlbumRecord]:
        """Get an album by id, reading at most the first matching row."""
        session = self._get_session()
        try:
            async with session:
                result = await session.execute(SELECT_ALBUM, {"album_id": album_id})
                row = result.first()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Album query failed: {e}") from e

        if row is None:
            return None

        return decode_album_row(tuple(row))

    async def close(self) -> None:
        """Close database engine."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
        logger.info("PostgreSQL album repository closed")
