"""
Album response schema.

This Pydantic model defines the wire shape of an album; field order
here is the field order of the JSON body.
"""

from pydantic import BaseModel, ConfigDict, Field


class AlbumResponse(BaseModel):
    """An album as returned by GET /album/{id}."""

    id: int = Field(
        ...,
        description="Album identifier (0 for the not-found placeholder)",
    )
    title: str = Field(..., description="Album title")
    artist: str = Field(..., description="Recording artist")
    genre: str = Field(..., description="Genre")
    year: str = Field(..., description="Release year")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "examples": [
                {
                    "id": 1,
                    "title": "Abbey Road",
                    "artist": "The Beatles",
                    "genre": "Rock",
                    "year": "1969",
                },
                {
                    "id": 0,
                    "title": "N/A",
                    "artist": "N/A",
                    "genre": "N/A",
                    "year": "N/A",
                },
            ]
        },
    )
