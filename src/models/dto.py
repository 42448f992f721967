#!/usr/bin/env python
"""
Pydantic DTOs shared by the catalog/playlist stores and the HTTP layer.

Both storage backends return these so routes never see ORM rows or raw CSV
records. JSON keys follow the frontend's camelCase names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SongDTO(BaseModel):
    """A catalogued song; ``id`` is only known to the relational backend."""

    id: Optional[int] = None
    name: str
    link: str

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)


class PlaylistItemDTO(BaseModel):
    """Flattened playlist entry (item joined with its song and artist)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_name: str = Field(alias="userName")
    artist_name: str = Field(alias="artistName")
    song_name: str = Field(alias="songName")
    song_link: Optional[str] = Field(default=None, alias="songLink")
    added_at: datetime = Field(alias="addedAt")

    def to_json(self) -> dict:
        data = self.model_dump(by_alias=True)
        data["addedAt"] = self.added_at.isoformat()
        return data


class PlaylistAddRequest(BaseModel):
    """Body of ``POST /api/playlist/add``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    song_name: str = Field(alias="songName", min_length=1)
    artist_name: str = Field(alias="artistName", min_length=1)
    user_name: str = Field(alias="userName", min_length=1)
    song_link: Optional[str] = Field(default=None, alias="songLink")

    @field_validator("song_name", "artist_name", "user_name", mode="before")
    @classmethod
    def _strip_required(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class UploadResult(BaseModel):
    """Outcome of ingesting one artist CSV."""

    artist_name: str
    created_artist: bool = False
    processed: int = 0
    skipped: int = 0
    failed: int = 0


__all__ = ["SongDTO", "PlaylistItemDTO", "PlaylistAddRequest", "UploadResult"]
