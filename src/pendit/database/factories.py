"""Store factory functions."""

import os
from pathlib import Path
from typing import Optional

from pendit.database.sqlalchemy_store import SQLAlchemySnapshotStore


def default_database_path() -> str:
    """Return ~/.pendit/pendit.db, creating the directory if needed."""
    db_dir = Path.home() / ".pendit"
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / "pendit.db")


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemySnapshotStore:
    """Create a SQLite-backed snapshot store.

    Args:
        database_path: Path to SQLite database file. If None, checks PENDIT_DB_PATH
            environment variable, then defaults to ~/.pendit/pendit.db

    Returns:
        SQLAlchemySnapshotStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("PENDIT_DB_PATH")

    if database_path is None:
        database_path = default_database_path()

    return SQLAlchemySnapshotStore(f"sqlite:///{database_path}")
