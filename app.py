import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, send_from_directory, request, jsonify, g
from flask_cors import CORS

from config import Config
from src.settings import load_app_settings
from src.database.db_manager import build_engine_options, initialize_database
from src.domain.catalog import FilesystemCatalogStore, SqlCatalogStore
from src.domain.playlist import FilesystemPlaylistStore, SqlPlaylistStore
from src.interfaces.http.routes import (
    artist_bp,
    upload_bp,
    playlist_bp,
    health_bp,
)
from src.observability import configure_structured_logging, metrics_blueprint
from src.observability.logging import JsonFormatter, RequestContextFilter


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """Send JSON log records to a per-run file under log_dir as well.

    Calling it again swaps the previous file handler for a new one.
    Returns the path of the log file.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"setlist-{datetime.now():%Y%m%d-%H%M%S}.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for handler in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(JsonFormatter())
    file_handler.addFilter(RequestContextFilter())
    root.addHandler(file_handler)
    return log_path


def build_stores(app, settings):
    """Wire the catalog and playlist stores for the configured backend."""
    if settings.catalog_backend == 'filesystem':
        catalog = FilesystemCatalogStore(settings.data_dir)
        playlist = FilesystemPlaylistStore(catalog)
        app.logger.info("Using filesystem catalog at %s", catalog.data_dir)
    else:
        initialize_database(app)
        catalog = SqlCatalogStore()
        playlist = SqlPlaylistStore(catalog)
        app.logger.info("Using database catalog")
    app.extensions['catalog_store'] = catalog
    app.extensions['playlist_store'] = playlist
    return catalog, playlist


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    settings = load_app_settings(app.config)
    app.config.update(
        {
            'CATALOG_BACKEND': settings.catalog_backend,
            'SQLALCHEMY_DATABASE_URI': settings.database_url,
            'SQLALCHEMY_ENGINE_OPTIONS': build_engine_options(settings.database_url, settings.database_ssl),
            'MAX_CONTENT_LENGTH': settings.max_content_length,
        }
    )
    app.extensions['settings'] = settings
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_allowed_origins}},
    )

    @app.errorhandler(413)
    def _upload_too_large(_error):
        return jsonify(
            {
                "error": "payload_too_large",
                "message": f"Upload exceeds the {settings.max_content_length} byte limit.",
            }
        ), 413

    build_stores(app, settings)

    # --- Register Blueprints ---
    app.register_blueprint(artist_bp)
    app.register_blueprint(upload_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(metrics_blueprint)
    app.register_blueprint(health_bp)

    # --- Catch-all route for serving the built frontend ---
    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def serve_frontend(path):
        build_dir = settings.frontend_build_dir
        if path.startswith('api/') or not build_dir or not os.path.isdir(build_dir):
            return jsonify({"error": "not_found", "message": "Resource not found."}), 404
        if path != "" and os.path.exists(os.path.join(build_dir, path)):
            return send_from_directory(build_dir, path)
        return send_from_directory(build_dir, 'index.html')

    return app


if __name__ == '__main__':
    # With the reloader only the child process writes a log file
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src', 'log')
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    logger.info("Starting Flask application on port %s...", Config.PORT)
    app.run(debug=debug_mode, host='0.0.0.0', port=Config.PORT, threaded=True)
