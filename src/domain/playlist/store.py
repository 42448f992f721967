from __future__ import annotations

from typing import List, Optional

from src.models.dto import PlaylistItemDTO


class PlaylistStore:
    """Interface for the shared playlist.

    Entries always point at a song that already exists in the catalog; adding
    never creates catalog rows.
    """

    def add(
        self,
        song_name: str,
        artist_name: str,
        user_name: str,
        song_link: Optional[str] = None,
    ) -> PlaylistItemDTO:  # pragma: no cover - interface
        raise NotImplementedError

    def remove(self, item_id: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def clear(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def list(self) -> List[PlaylistItemDTO]:  # pragma: no cover - interface
        raise NotImplementedError


__all__ = ["PlaylistStore"]
