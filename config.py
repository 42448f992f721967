#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


def normalize_database_url(url: str) -> str:
    # Hosted Postgres providers still hand out the legacy scheme
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'setlist-dev-secret'

    # Which catalog/playlist backend to wire: 'database' or 'filesystem'
    CATALOG_BACKEND = (os.getenv('CATALOG_BACKEND') or 'database').strip().lower()

    # Database (relational backend)
    SQLALCHEMY_DATABASE_URI = normalize_database_url(
        os.environ.get('DATABASE_URL')
        or 'sqlite:///' + os.path.join(basedir, 'src', 'database', 'instance', 'setlist.db')
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Require SSL for Postgres connections (hosted databases)
    DATABASE_SSL = _get_bool('DATABASE_SSL', False)

    # Filesystem backend
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(basedir, 'data_managed_by_api'))

    # HTTP
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:5173')
    MAX_CONTENT_LENGTH = max(1, _get_int('MAX_UPLOAD_BYTES', 5 * 1024 * 1024))
    FRONTEND_BUILD_DIR = os.getenv('FRONTEND_BUILD_DIR') or None
    PORT = _get_int('PORT', 3001)

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
