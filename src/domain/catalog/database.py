from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.database.db_manager import db, Artist, Song
from src.domain.catalog.store import CatalogStore, SongRow, validate_artist_name
from src.domain.errors import StoreError
from src.models.dto import SongDTO, UploadResult


logger = logging.getLogger(__name__)


def _dialect_insert(dialect_name: str):
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        return None
    return insert


class SqlCatalogStore(CatalogStore):
    """Catalog persisted in the ``artists``/``songs`` tables."""

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def find_artist(self, artist_name: str) -> Optional[Artist]:
        return self.session.execute(
            select(Artist).where(Artist.name == artist_name)
        ).scalar_one_or_none()

    def find_song(self, artist_id: int, song_name: str) -> Optional[Song]:
        return self.session.execute(
            select(Song).where(Song.artist_id == artist_id, Song.name == song_name)
        ).scalar_one_or_none()

    def list_artists(self) -> List[str]:
        try:
            return list(self.session.execute(select(Artist.name).order_by(Artist.name)).scalars())
        except SQLAlchemyError as e:
            raise StoreError("Failed to list artists") from e

    def list_songs(self, artist_name: str) -> List[SongDTO]:
        name = validate_artist_name(artist_name)
        try:
            rows = self.session.execute(
                select(Song.id, Song.name, Song.link)
                .join(Artist, Song.artist_id == Artist.id)
                .where(Artist.name == name)
                .order_by(Song.name)
            ).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list songs for {name!r}") from e
        return [SongDTO(id=row.id, name=row.name, link=row.link) for row in rows]

    def _find_or_create_artist(self, artist_name: str) -> tuple[Artist, bool]:
        artist = self.find_artist(artist_name)
        if artist is not None:
            return artist, False
        try:
            with self.session.begin_nested():
                artist = Artist(name=artist_name)
                self.session.add(artist)
            return artist, True
        except IntegrityError:
            # Lost an insert race with a concurrent upload
            artist = self.find_artist(artist_name)
            if artist is None:
                raise
            return artist, False

    def _upsert_song(self, artist_id: int, song_name: str, song_link: str) -> None:
        insert = _dialect_insert(self.session.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(Song).values(artist_id=artist_id, name=song_name, link=song_link)
            stmt = stmt.on_conflict_do_update(
                index_elements=["artist_id", "name"],
                set_={"link": stmt.excluded.link},
            )
            self.session.execute(stmt)
            return
        song = self.find_song(artist_id, song_name)
        if song is None:
            self.session.add(Song(artist_id=artist_id, name=song_name, link=song_link))
        else:
            song.link = song_link
        self.session.flush()

    def upsert_artist_songs(self, artist_name: str, rows: Sequence[SongRow]) -> UploadResult:
        name = validate_artist_name(artist_name)
        result = UploadResult(artist_name=name)
        try:
            artist, result.created_artist = self._find_or_create_artist(name)
            for song_name, song_link in rows:
                try:
                    with self.session.begin_nested():
                        self._upsert_song(artist.id, song_name, song_link)
                    result.processed += 1
                except SQLAlchemyError as e:
                    result.failed += 1
                    logger.error("Failed to upsert song %r for artist %r: %s", song_name, name, e)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error("Upload for artist %r rolled back: %s", name, e, exc_info=True)
            raise StoreError(f"Failed to store songs for {name!r}") from e
        # Upserts bypass the identity map; make later ORM reads see fresh links
        self.session.expire_all()
        logger.info(
            "Stored %s song(s) for %r (failed=%s, new artist=%s)",
            result.processed, name, result.failed, result.created_artist,
        )
        return result

    def ping(self) -> None:
        try:
            self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreError(f"Database unavailable: {e}") from e


__all__ = ["SqlCatalogStore"]
