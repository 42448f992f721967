"""Artist CSV upload."""

from __future__ import annotations

import logging
import os

from flask import Blueprint, current_app, jsonify, request

from src.domain.errors import ValidationError
from src.domain.ingestion import (
    SONG_HEADERS,
    artist_name_from_filename,
    decode_upload,
    parse_csv,
    song_rows,
)
from src.interfaces.http.errors import catalog_error_response, error_response
from src.observability.metrics import record_upload

logger = logging.getLogger(__name__)

upload_bp = Blueprint('upload_bp', __name__, url_prefix='/api/upload')

UPLOAD_FIELD = 'artistFile'
CSV_MIMETYPES = {'text/csv', 'application/csv', 'application/vnd.ms-excel'}


def _is_csv(file_storage) -> bool:
    ext = os.path.splitext(file_storage.filename or '')[1].lower()
    return ext == '.csv' or (file_storage.mimetype or '').lower() in CSV_MIMETYPES


def _resolve_artist_name(file_storage) -> str:
    explicit = (request.form.get('artistName') or '').strip()
    if explicit:
        return explicit
    # Browsers may send a client-side path; the store rejects anything unsafe
    return artist_name_from_filename((file_storage.filename or '').replace('\\', '/'))


@upload_bp.route('/artist', methods=['POST'])
def upload_artist():
    file_storage = request.files.get(UPLOAD_FIELD)
    if file_storage is None or not file_storage.filename:
        record_upload('rejected')
        return error_response('invalid_request', f"No file was sent in field '{UPLOAD_FIELD}'.", 400)
    if not _is_csv(file_storage):
        record_upload('rejected')
        return error_response('invalid_request', 'Only .csv files are allowed.', 400)

    artist_name = _resolve_artist_name(file_storage)
    if not artist_name:
        record_upload('rejected')
        return error_response('invalid_request', 'Could not determine the artist name from the upload.', 400)

    try:
        records = parse_csv(decode_upload(file_storage.read()), SONG_HEADERS)
        rows, skipped = song_rows(records)
        if not rows:
            raise ValidationError('CSV file is empty or has no valid song_name,song_link rows.')
        result = current_app.extensions['catalog_store'].upsert_artist_songs(artist_name, rows)
    except Exception as e:
        record_upload('rejected' if isinstance(e, ValidationError) else 'error')
        return catalog_error_response(e, f"Error processing upload for artist {artist_name!r}")

    result.skipped += skipped
    record_upload('success', songs=result.processed)
    logger.info(
        "Upload %s stored for artist %r: processed=%s skipped=%s failed=%s",
        file_storage.filename, result.artist_name, result.processed, result.skipped, result.failed,
    )
    return jsonify({
        'message': f"File {file_storage.filename} uploaded. Artist \"{result.artist_name}\" added/updated.",
        'artistName': result.artist_name,
        'createdArtist': result.created_artist,
        'processed': result.processed,
        'skipped': result.skipped,
        'failed': result.failed,
    }), 201


__all__ = ['upload_bp']
