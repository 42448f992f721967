"""Playlist kept in ``_playlist.csv`` beside the filesystem catalog.

Unlike the catalog files this one is written with the ``csv`` module, so user
names may contain commas. Like the catalog it is not locked.
"""

from __future__ import annotations

import csv
import logging
import os
from datetime import datetime
from typing import List, Optional

from src.domain.catalog.filesystem import FilesystemCatalogStore
from src.domain.errors import NotFoundError, StoreError
from src.domain.playlist.store import PlaylistStore
from src.models.dto import PlaylistItemDTO

logger = logging.getLogger(__name__)

PLAYLIST_FILENAME = "_playlist.csv"
PLAYLIST_FIELDS = ["id", "user_name", "artist_name", "song_name", "song_link", "added_at"]


class FilesystemPlaylistStore(PlaylistStore):
    def __init__(self, catalog: FilesystemCatalogStore) -> None:
        self.catalog = catalog
        self.path = os.path.join(catalog.data_dir, PLAYLIST_FILENAME)

    def _load(self) -> List[PlaylistItemDTO]:
        self.catalog.ensure_data_dir()
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as handle:
                rows = list(csv.DictReader(handle))
        except OSError as e:
            raise StoreError("Failed to read playlist") from e
        items = []
        for row in rows:
            try:
                items.append(
                    PlaylistItemDTO(
                        id=int(row["id"]),
                        user_name=row["user_name"],
                        artist_name=row["artist_name"],
                        song_name=row["song_name"],
                        song_link=row.get("song_link") or None,
                        added_at=datetime.fromisoformat(row["added_at"]),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed playlist row %r: %s", row, e)
        return items

    def _save(self, items: List[PlaylistItemDTO]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8", newline="") as handle:
                writer = csv.DictWriter(handle, fieldnames=PLAYLIST_FIELDS, lineterminator="\n")
                writer.writeheader()
                for item in items:
                    writer.writerow(
                        {
                            "id": item.id,
                            "user_name": item.user_name,
                            "artist_name": item.artist_name,
                            "song_name": item.song_name,
                            "song_link": item.song_link or "",
                            "added_at": item.added_at.isoformat(),
                        }
                    )
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError("Failed to write playlist") from e

    def add(
        self,
        song_name: str,
        artist_name: str,
        user_name: str,
        song_link: Optional[str] = None,
    ) -> PlaylistItemDTO:
        if artist_name.strip() not in self.catalog.list_artists():
            raise NotFoundError(f"Artist {artist_name!r} not found")
        songs = {song.name: song for song in self.catalog.list_songs(artist_name)}
        song = songs.get(song_name)
        if song is None:
            raise NotFoundError(f"Song {song_name!r} by {artist_name!r} not found")

        items = self._load()
        item = PlaylistItemDTO(
            id=max((i.id for i in items), default=0) + 1,
            user_name=user_name,
            artist_name=artist_name.strip(),
            song_name=song.name,
            song_link=song.link,
            added_at=datetime.utcnow(),
        )
        items.append(item)
        self._save(items)
        logger.info("Playlist item %s added: %r by %r for %s", item.id, song.name, item.artist_name, user_name)
        return item

    def remove(self, item_id: int) -> None:
        items = self._load()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            raise NotFoundError(f"Playlist item {item_id} not found")
        self._save(remaining)

    def clear(self) -> int:
        items = self._load()
        self._save([])
        logger.info("Playlist cleared (%s item(s))", len(items))
        return len(items)

    def list(self) -> List[PlaylistItemDTO]:
        return sorted(self._load(), key=lambda item: (item.added_at, item.id))


__all__ = ["FilesystemPlaylistStore", "PLAYLIST_FILENAME"]
