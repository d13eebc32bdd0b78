"""
Album lookup endpoint.

- GET /album/{album_id} - Get one album by its numeric id

The body is the album as JSON, or the not-found placeholder when no
genuine row is available. Non-numeric ids get the plain text body
"Invalid ID" and never reach the database.
"""

import re
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse

from api.dependencies import get_app_settings, get_lookup_service
from api.schemas.album import AlbumResponse
from core.config import Settings
from core.logging import get_logger
from services.album_lookup import AlbumLookupService, LookupResult, LookupStatus


logger = get_logger(__name__)
router = APIRouter(tags=["Albums"])

INVALID_ID_BODY = "Invalid ID"

_BASE10 = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

# HTTP status per lookup outcome when STATUS_MODE=strict
_STRICT_STATUS = {
    LookupStatus.FOUND: status.HTTP_200_OK,
    LookupStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    LookupStatus.ERROR: status.HTTP_502_BAD_GATEWAY,
}


def parse_album_id(raw: str) -> Optional[int]:
    """
    Parse a path segment as a signed base-10 64-bit integer.

    Returns None for anything else, including whitespace, decimals,
    digit separators and out-of-range values.
    """
    if not _BASE10.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _request_uri(request: Request) -> str:
    uri = request.url.path
    if request.url.query:
        uri = f"{uri}?{request.url.query}"
    return uri


def _log_request(request: Request) -> None:
    client = request.client
    remote_addr = f"{client.host}:{client.port}" if client else "unknown"
    logger.info(
        "GET album",
        remote_addr=remote_addr,
        uri=_request_uri(request),
    )


def _invalid_id_response() -> Response:
    # Invalid ids answer 200 in every status mode
    return PlainTextResponse(INVALID_ID_BODY, status_code=status.HTTP_200_OK)


def render_album(result: LookupResult, settings: Settings) -> Response:
    """Serialize a lookup result into the HTTP response."""
    try:
        body = AlbumResponse.model_validate(result.record.to_dict()).model_dump_json()
    except ValueError as e:
        # Pydantic validation and serialization errors are both ValueErrors
        logger.error(
            "Failed to serialize album",
            album_id=result.record.id,
            error=str(e),
            exc_info=True,
        )
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    status_code = _STRICT_STATUS[result.status] if settings.is_strict else status.HTTP_200_OK
    return Response(
        content=body,
        media_type="application/json",
        status_code=status_code,
    )


@router.get(
    "/album/{album_id}",
    response_model=AlbumResponse,
    responses={
        404: {"model": AlbumResponse, "description": "No album with this id (placeholder body)"},
        502: {"model": AlbumResponse, "description": "Database error (placeholder body)"},
    },
)
async def get_album(
    album_id: str,
    request: Request,
    service: AlbumLookupService = Depends(get_lookup_service),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Get an album by id.

    Returns the matching album, or the placeholder
    {"id": 0, "title": "N/A", ...} when the album cannot be read.
    """
    _log_request(request)

    parsed_id = parse_album_id(album_id)
    if parsed_id is None:
        return _invalid_id_response()

    result = await service.find(parsed_id)
    return render_album(result, settings)


@router.get("/album/", include_in_schema=False)
async def get_album_empty_id(request: Request) -> Response:
    """An empty id segment is an invalid id."""
    _log_request(request)
    return _invalid_id_response()
