"""Shared playlist layered on the catalog."""

from .store import PlaylistStore
from .database import SqlPlaylistStore
from .filesystem import FilesystemPlaylistStore

__all__ = ["PlaylistStore", "SqlPlaylistStore", "FilesystemPlaylistStore"]
