from __future__ import annotations

from typing import List, Sequence, Tuple

from src.domain.errors import ValidationError
from src.models.dto import SongDTO, UploadResult


SongRow = Tuple[str, str]


class CatalogStore:
    """Interface for the artist/song catalog."""

    def list_artists(self) -> List[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def list_songs(self, artist_name: str) -> List[SongDTO]:  # pragma: no cover - interface
        raise NotImplementedError

    def upsert_artist_songs(
        self, artist_name: str, rows: Sequence[SongRow]
    ) -> UploadResult:  # pragma: no cover - interface
        raise NotImplementedError

    def ping(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError


def validate_artist_name(artist_name: str) -> str:
    name = (artist_name or "").strip()
    if not name:
        raise ValidationError("Artist name is required.")
    return name


__all__ = ["CatalogStore", "SongRow", "validate_artist_name"]
