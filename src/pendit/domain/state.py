"""Owned single-writer state container.

The live snapshot is held by a ``TrackerState`` that callers pass to the
services explicitly. Every mutation replaces the whole snapshot in memory
and rewrites it to the store.
"""

from typing import Iterable, Optional

from loguru import logger

from pendit.database.base import SnapshotStore
from pendit.database.mappers import decode_payload, encode_snapshot, payload_to_snapshot
from pendit.domain.entities import Snapshot
from pendit.domain.errors import StoreError, ValidationError
from pendit.domain.migration import migrate_payload, needs_migration

DEFAULT_STORAGE_KEY = "simple_pending_v3"
DEFAULT_LEGACY_KEYS = ("simple_pending_v2", "simple_pending_v1")


def parse_snapshot(text: str) -> tuple[Snapshot, bool]:
    """Decode serialized data of any known schema version.

    Returns:
        Tuple of (snapshot, whether a migration was applied)

    Raises:
        ValueError: If the data is malformed
    """
    payload = decode_payload(text)
    migrated = needs_migration(payload)
    return payload_to_snapshot(migrate_payload(payload)), migrated


class TrackerState:
    """Holds the live snapshot and flushes it to the store on every commit."""

    def __init__(
        self,
        store: SnapshotStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        snapshot: Optional[Snapshot] = None,
    ):
        """Initialize tracker state.

        Args:
            store: Snapshot store used for persistence
            storage_key: Key the current snapshot is stored under
            snapshot: Optional initial snapshot (empty if None)
        """
        self.store = store
        self.storage_key = storage_key
        self.snapshot = snapshot if snapshot is not None else Snapshot()
        self.unsaved = False
        self.migrated_from: Optional[str] = None

    @classmethod
    def open(
        cls,
        store: SnapshotStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        legacy_keys: Iterable[str] = DEFAULT_LEGACY_KEYS,
    ) -> "TrackerState":
        """Create a state and load it from the store."""
        state = cls(store, storage_key)
        state.load(legacy_keys)
        return state

    def load(self, legacy_keys: Iterable[str] = DEFAULT_LEGACY_KEYS) -> Snapshot:
        """Load the snapshot, migrating data found under an older key or schema.

        The current key is read first. Only when it holds nothing are the
        legacy keys probed, in order. Migrated data is written back under the
        current key right away, so the probe happens at most once per key
        transition. Malformed data under the current key is treated as no
        data; a malformed legacy key is skipped in favour of the next one.

        Raises:
            StoreError: If the store cannot be read
        """
        self.migrated_from = None
        self.snapshot = Snapshot()

        text = self.store.load(self.storage_key)
        if text is not None:
            loaded = self._parse(self.storage_key, text)
            if loaded is not None:
                snapshot, migrated = loaded
                self._adopt(snapshot, self.storage_key if migrated else None)
            return self.snapshot

        for key in legacy_keys:
            if key == self.storage_key:
                continue
            text = self.store.load(key)
            if text is None:
                continue
            loaded = self._parse(key, text)
            if loaded is not None:
                self._adopt(loaded[0], key)
                return self.snapshot

        logger.debug("No snapshot stored under {}; starting empty", self.storage_key)
        return self.snapshot

    def _parse(self, key: str, text: str) -> Optional[tuple[Snapshot, bool]]:
        try:
            return parse_snapshot(text)
        except ValueError as e:
            logger.warning("Ignoring malformed snapshot under {}: {}", key, e)
            return None

    def _adopt(self, snapshot: Snapshot, migrated_from: Optional[str]) -> None:
        self.snapshot = snapshot
        if migrated_from is None:
            return

        self.migrated_from = migrated_from
        logger.info(
            "Migrated {} entries from {} to {}",
            len(snapshot.entries),
            migrated_from,
            self.storage_key,
        )
        try:
            self.save()
        except StoreError as e:
            logger.warning("Migrated snapshot kept in memory until the next save: {}", e)

    def save(self) -> None:
        """Write the in-memory snapshot to the store.

        Raises:
            StoreError: If the write fails; the in-memory snapshot is kept
        """
        try:
            self.store.save(self.storage_key, encode_snapshot(self.snapshot))
        except StoreError as e:
            self.unsaved = True
            logger.warning("Snapshot not saved, changes are kept in memory: {}", e)
            raise
        self.unsaved = False

    def retry_save(self) -> None:
        """Flush a snapshot whose previous save failed."""
        self.save()

    def commit(self, snapshot: Snapshot) -> None:
        """Replace the live snapshot and persist it."""
        self.snapshot = snapshot
        self.save()

    def import_text(self, text: str) -> Snapshot:
        """Replace the live snapshot with serialized data of any known version.

        Raises:
            ValidationError: If the data is malformed
            StoreError: If the imported snapshot cannot be saved
        """
        try:
            snapshot, _ = parse_snapshot(text)
        except ValueError as e:
            raise ValidationError(f"Cannot import snapshot: {e}") from e
        self.commit(snapshot)
        return snapshot
