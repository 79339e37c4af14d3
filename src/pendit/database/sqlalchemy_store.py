"""SQLAlchemy snapshot store implementation."""

from typing import Optional
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pendit.database.base import SnapshotStore
from pendit.database.models import StoredSnapshot, create_session_factory
from pendit.domain.errors import StoreError


class SQLAlchemySnapshotStore(SnapshotStore):
    """SQLAlchemy-based implementation of SnapshotStore."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

        Raises:
            StoreError: If the database cannot be opened
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not open store '{database_url}': {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def load(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None."""
        session = self._get_session()
        try:
            row = session.get(StoredSnapshot, key)
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Could not read snapshot '{key}': {e}") from e
        if row is None:
            return None
        return row.payload

    def save(self, key: str, payload: str) -> None:
        """Insert or replace the payload stored under key."""
        session = self._get_session()
        try:
            row = session.get(StoredSnapshot, key)
            if row is None:
                session.add(StoredSnapshot(key=key, payload=payload))
            else:
                row.payload = payload
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Could not save snapshot '{key}': {e}") from e
        logger.debug("Saved snapshot {} ({} bytes)", key, len(payload))

    def exists(self, key: str) -> bool:
        """Check whether a payload is stored under key."""
        return self.load(key) is not None

    def list_keys(self) -> list[str]:
        """List all keys holding a payload."""
        session = self._get_session()
        try:
            rows = session.query(StoredSnapshot.key).order_by(StoredSnapshot.key).all()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Could not list snapshots: {e}") from e
        return [row.key for row in rows]
