"""Storage layer for pendit application."""

from pendit.database.base import SnapshotStore
from pendit.database.factories import create_sqlite_store

__all__ = ["SnapshotStore", "create_sqlite_store"]
