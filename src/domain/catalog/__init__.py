"""Catalog domain: artists and their songs behind one store interface."""

from .store import CatalogStore, validate_artist_name
from .filesystem import FilesystemCatalogStore
from .database import SqlCatalogStore

__all__ = [
    "CatalogStore",
    "FilesystemCatalogStore",
    "SqlCatalogStore",
    "validate_artist_name",
]
