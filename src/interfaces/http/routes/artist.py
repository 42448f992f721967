import logging

from flask import Blueprint, current_app, jsonify

from src.interfaces.http.errors import catalog_error_response

logger = logging.getLogger(__name__)

artist_bp = Blueprint('artist_bp', __name__, url_prefix='/api')


def get_catalog_store():
    return current_app.extensions['catalog_store']


@artist_bp.route('/artists', methods=['GET'])
def list_artists_api():
    try:
        artists = get_catalog_store().list_artists()
    except Exception as e:
        return catalog_error_response(e, "Error listing artists")
    return jsonify(artists), 200


@artist_bp.route('/artists/<path:artist_name>/songs', methods=['GET'])
def list_artist_songs_api(artist_name: str):
    try:
        songs = get_catalog_store().list_songs(artist_name)
    except Exception as e:
        return catalog_error_response(e, f"Error fetching songs for {artist_name!r}")
    return jsonify([song.to_json() for song in songs]), 200


__all__ = ['artist_bp']
