"""CSV ingestion helpers."""

from .csv_parser import (
    ARTIST_HEADERS,
    SONG_HEADERS,
    artist_name_from_filename,
    decode_upload,
    parse_csv,
    read_csv_file,
    song_rows,
)

__all__ = [
    "ARTIST_HEADERS",
    "SONG_HEADERS",
    "artist_name_from_filename",
    "decode_upload",
    "parse_csv",
    "read_csv_file",
    "song_rows",
]
