"""Catalog backed by a directory of CSV files.

Layout::

    <data_dir>/_artists_list.csv   artist_name
    <data_dir>/<Artist>.csv        song_name,song_link

Files are UTF-8, newline-terminated and unquoted. Nothing here takes a lock:
two writers touching the same file at once can lose rows.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Sequence

from src.domain.catalog.store import CatalogStore, SongRow, validate_artist_name
from src.domain.errors import NotFoundError, StoreError, ValidationError
from src.domain.ingestion import ARTIST_HEADERS, SONG_HEADERS, read_csv_file
from src.models.dto import SongDTO, UploadResult

logger = logging.getLogger(__name__)

ARTISTS_LIST_FILENAME = "_artists_list.csv"


class FilesystemCatalogStore(CatalogStore):
    def __init__(self, data_dir: str) -> None:
        self.data_dir = os.path.abspath(data_dir)
        self.artists_list_path = os.path.join(self.data_dir, ARTISTS_LIST_FILENAME)

    # --- layout helpers ---

    def ensure_data_dir(self) -> None:
        try:
            if not os.path.isdir(self.data_dir):
                os.makedirs(self.data_dir, exist_ok=True)
                logger.info("Created catalog data directory: %s", self.data_dir)
            if not os.path.exists(self.artists_list_path):
                self._write_lines(self.artists_list_path, ARTIST_HEADERS, [])
                logger.info("Initialized %s", self.artists_list_path)
        except OSError as e:
            raise StoreError(f"Catalog directory unavailable: {self.data_dir}") from e

    def artist_path(self, artist_name: str) -> str:
        name = validate_artist_name(artist_name)
        if ".." in name or "/" in name or "\\" in name:
            raise ValidationError(f"Invalid artist name: {artist_name!r}")
        if not name.isprintable():
            # One artist per line in the artist list
            raise ValidationError(f"Artist names may not contain control characters: {name!r}")
        if name.startswith("_"):
            raise ValidationError(f"Artist names may not start with '_': {name!r}")
        if "," in name:
            # The artist list is unquoted
            raise ValidationError(f"Artist names may not contain commas: {name!r}")
        return os.path.join(self.data_dir, f"{name}.csv")

    @staticmethod
    def _write_lines(path: str, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        lines = [",".join(headers)] + [",".join(row) for row in rows]
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
            handle.write("\n".join(lines) + "\n")
        os.replace(tmp_path, path)

    def _read_songs(self, path: str) -> Dict[str, str]:
        songs: Dict[str, str] = {}
        for record in read_csv_file(path, SONG_HEADERS):
            name = (record.get("song_name") or "").strip()
            if name:
                songs[name] = (record.get("song_link") or "").strip()
        return songs

    # --- CatalogStore ---

    def list_artists(self) -> List[str]:
        self.ensure_data_dir()
        try:
            records = read_csv_file(self.artists_list_path, ARTIST_HEADERS)
        except OSError as e:
            raise StoreError("Failed to read artist list") from e
        names = {(r.get("artist_name") or "").strip() for r in records}
        return sorted(name for name in names if name)

    def list_songs(self, artist_name: str) -> List[SongDTO]:
        path = self.artist_path(artist_name)
        self.ensure_data_dir()
        if not os.path.exists(path):
            raise NotFoundError(f"No songs file for artist {artist_name.strip()!r}")
        try:
            songs = self._read_songs(path)
        except OSError as e:
            raise StoreError(f"Failed to read songs for {artist_name!r}") from e
        return [SongDTO(name=name, link=link) for name, link in sorted(songs.items())]

    def upsert_artist_songs(self, artist_name: str, rows: Sequence[SongRow]) -> UploadResult:
        path = self.artist_path(artist_name)
        name = validate_artist_name(artist_name)
        self.ensure_data_dir()
        result = UploadResult(artist_name=name)
        try:
            existed = os.path.exists(path)
            songs = self._read_songs(path) if existed else {}
            for song_name, song_link in rows:
                songs[song_name] = song_link
                result.processed += 1
            self._write_lines(path, SONG_HEADERS, sorted(songs.items()))
            result.created_artist = self._add_to_artists_list(name)
        except OSError as e:
            logger.error("Failed to store songs for %s: %s", name, e, exc_info=True)
            raise StoreError(f"Failed to store songs for {name!r}") from e
        return result

    def _add_to_artists_list(self, artist_name: str) -> bool:
        records = read_csv_file(self.artists_list_path, ARTIST_HEADERS)
        artists = [(r.get("artist_name") or "").strip() for r in records]
        artists = [a for a in artists if a]
        if artist_name in artists:
            return False
        artists.append(artist_name)
        artists.sort()
        self._write_lines(self.artists_list_path, ARTIST_HEADERS, [(a,) for a in artists])
        logger.info("Artist %r added to %s", artist_name, self.artists_list_path)
        return True

    def ping(self) -> None:
        self.ensure_data_dir()
        if not os.access(self.data_dir, os.W_OK):
            raise StoreError(f"Catalog directory is not writable: {self.data_dir}")


__all__ = ["FilesystemCatalogStore", "ARTISTS_LIST_FILENAME"]
