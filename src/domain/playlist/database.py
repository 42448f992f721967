"""Playlist persisted in ``playlist_items`` and joined back to the catalog."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from src.database.db_manager import db, Artist, PlaylistItem, Song
from src.domain.catalog.database import SqlCatalogStore
from src.domain.errors import NotFoundError, StoreError
from src.domain.playlist.store import PlaylistStore
from src.models.dto import PlaylistItemDTO


logger = logging.getLogger(__name__)


class SqlPlaylistStore(PlaylistStore):
    def __init__(self, catalog: Optional[SqlCatalogStore] = None, session=None) -> None:
        self._session = session
        self.catalog = catalog or SqlCatalogStore(session=session)

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def add(
        self,
        song_name: str,
        artist_name: str,
        user_name: str,
        song_link: Optional[str] = None,
    ) -> PlaylistItemDTO:
        try:
            artist = self.catalog.find_artist(artist_name)
            if artist is None:
                raise NotFoundError(f"Artist {artist_name!r} not found")
            song = self.catalog.find_song(artist.id, song_name)
            if song is None:
                raise NotFoundError(f"Song {song_name!r} by {artist_name!r} not found")

            item = PlaylistItem(song_id=song.id, user_name=user_name)
            self.session.add(item)
            self.session.commit()
        except NotFoundError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to add playlist item") from e

        logger.info("Playlist item %s added: %r by %r for %s", item.id, song.name, artist.name, user_name)
        return PlaylistItemDTO(
            id=item.id,
            user_name=item.user_name,
            artist_name=artist.name,
            song_name=song.name,
            song_link=song.link,
            added_at=item.added_at,
        )

    def remove(self, item_id: int) -> None:
        try:
            result = self.session.execute(delete(PlaylistItem).where(PlaylistItem.id == item_id))
            if result.rowcount == 0:
                self.session.rollback()
                raise NotFoundError(f"Playlist item {item_id} not found")
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Failed to remove playlist item {item_id}") from e

    def clear(self) -> int:
        try:
            result = self.session.execute(delete(PlaylistItem))
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Failed to clear playlist") from e
        logger.info("Playlist cleared (%s item(s))", result.rowcount)
        return result.rowcount

    def list(self) -> List[PlaylistItemDTO]:
        stmt = (
            select(
                PlaylistItem.id,
                PlaylistItem.user_name,
                PlaylistItem.added_at,
                Artist.name.label("artist_name"),
                Song.name.label("song_name"),
                Song.link.label("song_link"),
            )
            .join(Song, PlaylistItem.song_id == Song.id)
            .join(Artist, Song.artist_id == Artist.id)
            .order_by(PlaylistItem.added_at.asc(), PlaylistItem.id.asc())
        )
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise StoreError("Failed to list playlist") from e
        return [
            PlaylistItemDTO(
                id=row.id,
                user_name=row.user_name,
                artist_name=row.artist_name,
                song_name=row.song_name,
                song_link=row.song_link,
                added_at=row.added_at,
            )
            for row in rows
        ]


__all__ = ["SqlPlaylistStore"]
