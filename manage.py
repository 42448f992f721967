# manage.py
import os
import sys

from app import create_app
from src.database.db_manager import db
from src.domain.errors import CatalogError
from src.domain.ingestion import SONG_HEADERS, artist_name_from_filename, parse_csv, song_rows

USAGE = "Usage: python manage.py create_db | import_artist <file.csv> [artist name]"


def create_db():
    """Creates the database tables."""
    app = create_app({'CATALOG_BACKEND': 'database'})
    with app.app_context():
        db.create_all()
        print(f"Database tables created at {app.config['SQLALCHEMY_DATABASE_URI']}")
    return 0


def import_artist(csv_path, artist_name=None):
    """Ingest a local CSV through the configured catalog store."""
    if not os.path.isfile(csv_path):
        print(f"File not found: {csv_path}")
        return 1
    artist_name = artist_name or artist_name_from_filename(csv_path)
    with open(csv_path, 'r', encoding='utf-8-sig') as handle:
        rows, skipped = song_rows(parse_csv(handle.read(), SONG_HEADERS))
    if not rows:
        print(f"No valid song rows in {csv_path}")
        return 1

    app = create_app()
    with app.app_context():
        try:
            result = app.extensions['catalog_store'].upsert_artist_songs(artist_name, rows)
        except CatalogError as e:
            print(f"Import failed: {e}")
            return 1
    print(
        f"Imported {result.processed} song(s) for {result.artist_name!r} "
        f"(skipped={skipped}, failed={result.failed})"
    )
    return 0


def main(argv):
    if len(argv) < 2:
        print("No command provided. " + USAGE)
        return 1
    command = argv[1]
    if command == 'create_db':
        return create_db()
    if command == 'import_artist' and len(argv) in (3, 4):
        return import_artist(argv[2], argv[3] if len(argv) == 4 else None)
    print(f"Unknown command: {command}")
    print(USAGE)
    return 1


if __name__ == '__main__':
    sys.exit(main(sys.argv))
