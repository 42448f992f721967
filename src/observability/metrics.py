from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

UPLOADS = Counter(
    "setlist_uploads_total",
    "Artist CSV uploads by outcome.",
    ["outcome"],
)
UPLOADED_SONGS = Counter(
    "setlist_uploaded_songs_total",
    "Song rows written by artist uploads.",
)
PLAYLIST_OPERATIONS = Counter(
    "setlist_playlist_operations_total",
    "Playlist operations by action and outcome.",
    ["action", "outcome"],
)


def record_upload(outcome: str, songs: int = 0) -> None:
    UPLOADS.labels(outcome=outcome).inc()
    if songs > 0:
        UPLOADED_SONGS.inc(songs)


def record_playlist_operation(action: str, outcome: str) -> None:
    PLAYLIST_OPERATIONS.labels(action=action, outcome=outcome).inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
