"""Lenient CSV ingestion for artist song lists and the master artist list.

Lines are split on bare commas; quoted fields are not understood. Catalog
files never contain quotes, and uploads that do will have their quoted commas
split like any other.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Sequence

from src.domain.errors import ValidationError

logger = logging.getLogger(__name__)

SONG_HEADERS = ("song_name", "song_link")
ARTIST_HEADERS = ("artist_name",)

Record = Dict[str, Optional[str]]


def _split(line: str) -> List[str]:
    return [value.strip() for value in line.split(",")]


def _resolve_headers(
    first_line: List[str], expected_headers: Optional[Sequence[str]]
) -> tuple[Optional[List[str]], int]:
    """Return ``(headers, data_start_index)`` for the given first line."""
    if expected_headers and all(
        index < len(first_line) and header == first_line[index]
        for index, header in enumerate(expected_headers)
    ):
        return list(expected_headers), 1
    if "song_name" in first_line or "artist_name" in first_line:
        return first_line, 1
    if expected_headers:
        # No recognizable header row: every line is data
        return list(expected_headers), 0
    if len(first_line) == 2:
        return list(SONG_HEADERS), 0
    if len(first_line) == 1:
        return list(ARTIST_HEADERS), 0
    return None, 0


def parse_csv(text: str, expected_headers: Optional[Sequence[str]] = None) -> List[Record]:
    """Parse CSV text into one dict per non-blank data line.

    Header interpretation, first match wins:

    1. the first line starts with ``expected_headers`` -> consumed as header;
    2. the first line mentions ``song_name`` or ``artist_name`` -> it is the header;
    3. ``expected_headers`` given -> no header row, all lines are data;
    4. guess from the column count (2 -> song columns, 1 -> artist column).

    Values missing from a short line come back as ``None``.
    """
    content = (text or "").strip()
    if not content:
        return []
    lines = content.split("\n")

    headers, start = _resolve_headers(_split(lines[0]), expected_headers)
    if headers is None:
        logger.debug("Could not infer CSV headers from first line %r", lines[0])
        return []

    records: List[Record] = []
    for line in lines[start:]:
        if not line.strip():
            continue
        values = _split(line)
        records.append(
            {header: (values[index] if index < len(values) else None) for index, header in enumerate(headers)}
        )
    return records


def read_csv_file(path: str, expected_headers: Optional[Sequence[str]] = None) -> List[Record]:
    """Parse a UTF-8 CSV file; a missing file reads as empty."""
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        logger.warning("CSV file not found while parsing: %s", path)
        return []
    return parse_csv(text, expected_headers)


def decode_upload(raw: bytes) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a byte-order mark."""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError("CSV file must be UTF-8 encoded.") from exc


def song_rows(records: Sequence[Record]) -> tuple[List[tuple[str, str]], int]:
    """Extract ``(song_name, song_link)`` pairs, returning ``(rows, skipped)``."""
    rows: List[tuple[str, str]] = []
    skipped = 0
    for record in records:
        name = (record.get("song_name") or "").strip()
        link = (record.get("song_link") or "").strip()
        if not name or not link:
            skipped += 1
            continue
        rows.append((name, link))
    return rows, skipped


def artist_name_from_filename(filename: str) -> str:
    stem, ext = os.path.splitext(os.path.basename(filename or ""))
    if ext.lower() != ".csv":
        stem = os.path.basename(filename or "")
    return stem.strip()


__all__ = [
    "SONG_HEADERS",
    "ARTIST_HEADERS",
    "parse_csv",
    "read_csv_file",
    "decode_upload",
    "song_rows",
    "artist_name_from_filename",
]
