"""Abstract snapshot store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotStore(ABC):
    """Key-value store for serialized snapshots.

    Keys are version-qualified (e.g. ``simple_pending_v3``) so data written
    under an older schema can coexist with current data until migrated.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the payload stored under key, or None if there is none.

        Raises:
            StoreError: If the store cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, payload: str) -> None:
        """Replace the payload stored under key.

        Raises:
            StoreError: If the payload cannot be written
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a payload is stored under key."""
        pass

    @abstractmethod
    def list_keys(self) -> list[str]:
        """List all keys holding a payload."""
        pass
