"""Shared playlist routes."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError as PayloadValidationError

from src.domain.errors import NotFoundError
from src.interfaces.http.errors import catalog_error_response, error_response
from src.models.dto import PlaylistAddRequest
from src.observability.metrics import record_playlist_operation

logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlist')


def get_playlist_store():
    return current_app.extensions['playlist_store']


def _outcome(exc: Exception) -> str:
    return 'not_found' if isinstance(exc, NotFoundError) else 'error'


@playlist_bp.route('', methods=['GET'])
def list_playlist():
    try:
        items = get_playlist_store().list()
    except Exception as e:
        return catalog_error_response(e, "Error listing playlist")
    return jsonify([item.to_json() for item in items]), 200


@playlist_bp.route('/add', methods=['POST'])
def add_to_playlist():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return error_response('invalid_request', 'Request body must be a JSON object.', 400)
    try:
        body = PlaylistAddRequest.model_validate(payload)
    except PayloadValidationError as exc:
        missing = sorted({str(err['loc'][0]) for err in exc.errors() if err.get('loc')})
        record_playlist_operation('add', 'rejected')
        return error_response(
            'invalid_request',
            f"Missing or invalid fields: {', '.join(missing) or 'body'}.",
            400,
        )

    try:
        item = get_playlist_store().add(
            body.song_name,
            body.artist_name,
            body.user_name,
            body.song_link,
        )
    except Exception as e:
        record_playlist_operation('add', _outcome(e))
        return catalog_error_response(e, "Error adding song to playlist")

    record_playlist_operation('add', 'success')
    return jsonify(item.to_json()), 201


@playlist_bp.route('/remove/<int:item_id>', methods=['DELETE'])
def remove_from_playlist(item_id: int):
    try:
        get_playlist_store().remove(item_id)
    except Exception as e:
        record_playlist_operation('remove', _outcome(e))
        return catalog_error_response(e, f"Error removing playlist item {item_id}")
    record_playlist_operation('remove', 'success')
    return jsonify({'message': f'Playlist item {item_id} removed.', 'id': item_id}), 200


@playlist_bp.route('/clear', methods=['DELETE'])
def clear_playlist():
    try:
        removed = get_playlist_store().clear()
    except Exception as e:
        record_playlist_operation('clear', 'error')
        return catalog_error_response(e, "Error clearing playlist")
    record_playlist_operation('clear', 'success')
    return jsonify({'message': 'Playlist cleared.', 'removed': removed}), 200


__all__ = ['playlist_bp']
