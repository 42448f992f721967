# src/database/db_manager.py
from flask_sqlalchemy import SQLAlchemy
import os  # Import os for path handling
import logging
from datetime import datetime
from sqlalchemy import ForeignKey, UniqueConstraint, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import relationship

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


class Artist(db.Model):
    __tablename__ = 'artists'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False, index=True)

    songs = relationship(
        'Song',
        back_populates='artist',
        order_by='Song.name',
        cascade='all, delete-orphan',
        passive_deletes=True,
        lazy=True,
    )

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}

    def __repr__(self) -> str:
        return f"<Artist {self.name}>"


class Song(db.Model):
    __tablename__ = 'songs'

    id = db.Column(db.Integer, primary_key=True)
    artist_id = db.Column(
        db.Integer,
        ForeignKey('artists.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    link = db.Column(db.String(1000), nullable=False)

    artist = relationship('Artist', back_populates='songs')

    __table_args__ = (
        UniqueConstraint('artist_id', 'name', name='uq_songs_artist_name'),
    )

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'link': self.link}

    def __repr__(self) -> str:
        return f"<Song {self.name}>"


class PlaylistItem(db.Model):
    __tablename__ = 'playlist_items'

    id = db.Column(db.Integer, primary_key=True)
    song_id = db.Column(
        db.Integer,
        ForeignKey('songs.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    user_name = db.Column(db.String(255), nullable=False)
    added_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    song = relationship('Song')

    def __repr__(self) -> str:
        return f"<PlaylistItem {self.id} song={self.song_id} by {self.user_name}>"


def build_engine_options(uri: str, require_ssl: bool = False) -> dict:
    """Engine options for the configured URL; SSL only applies to Postgres."""
    options: dict = {}
    try:
        backend = make_url(uri).get_backend_name()
    except Exception as e:
        logger.warning("Could not parse database URL for engine options: %s", e)
        return options
    if backend == 'postgresql':
        options['pool_pre_ping'] = True
        if require_ssl:
            options['connect_args'] = {'sslmode': 'require'}
    return options


def _enable_sqlite_savepoints(engine) -> None:
    """Let SQLAlchemy own BEGIN on pysqlite so SAVEPOINTs nest correctly."""

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    db.init_app(app)
    # Ensure the instance folder exists for SQLite database file
    instance_path = app.instance_path
    if not os.path.exists(instance_path):
        os.makedirs(instance_path)
        logger.info("Created instance folder: %s", instance_path)

    # Ensure the directory for the configured SQLite file exists
    try:
        uri = app.config.get('SQLALCHEMY_DATABASE_URI')
        if uri:
            url = make_url(uri)
            # Only handle file-based SQLite (not :memory:)
            if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
                db_dir = os.path.dirname(url.database)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)
                    logger.info("Created SQLite DB directory: %s", db_dir)
    except Exception as e:
        # Don't block app startup on path parsing issues; log and continue
        logger.warning("Could not ensure SQLite directory exists: %s", e)

    # Create database tables within the application context
    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            _enable_sqlite_savepoints(db.engine)
        db.create_all()
        logger.info("Database tables created or already exist.")
