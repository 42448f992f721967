import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'src' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories


@pytest.fixture
def db_overrides(tmp_path_factory):
    """Config for a database-backed app on a per-test sqlite file."""
    db_dir = tmp_path_factory.mktemp("db")
    db_path = Path(db_dir) / "test.sqlite"
    return {
        "TESTING": True,
        "CATALOG_BACKEND": "database",
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_path.as_posix()}",
    }


@pytest.fixture
def fs_overrides(tmp_path_factory):
    """Config for a filesystem-backed app on a per-test data directory."""
    data_dir = Path(tmp_path_factory.mktemp("catalog")) / "data_managed_by_api"
    return {
        "TESTING": True,
        "CATALOG_BACKEND": "filesystem",
        "DATA_DIR": str(data_dir),
    }


@pytest.fixture
def app(db_overrides):
    import app as app_module

    application = app_module.create_app(db_overrides)
    yield application


@pytest.fixture
def fs_app(fs_overrides):
    import app as app_module

    application = app_module.create_app(fs_overrides)
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from src.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        try:
            db.session.rollback()
        except Exception:
            pass
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fs_client(fs_app):
    return fs_app.test_client()
