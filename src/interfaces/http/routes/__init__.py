"""Route blueprints exposed via Flask."""

from .artist import artist_bp
from .upload import upload_bp
from .playlist import playlist_bp
from .health import health_bp

__all__ = [
    "artist_bp",
    "upload_bp",
    "playlist_bp",
    "health_bp",
]
