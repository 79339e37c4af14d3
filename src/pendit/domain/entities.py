"""Domain model entities for pendit.

These are pure data classes representing business concepts, independent of
how a snapshot is persisted. Lifecycle phase is never stored: it is derived
from the status label through the status registry.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pendit.domain.status import Phase, StatusInfo, classify

CURRENT_SCHEMA_VERSION = 3


@dataclass(frozen=True)
class Entry:
    """One tracked party/item transaction."""

    id: str
    party: str
    item: str
    quantity: int
    status: str
    notes: Optional[str]
    timestamp: datetime

    @property
    def status_info(self) -> StatusInfo:
        return classify(self.status)

    @property
    def phase(self) -> Phase:
        return self.status_info.phase

    @property
    def is_pending(self) -> bool:
        return self.phase is Phase.PENDING


@dataclass(frozen=True)
class EntryFields:
    """Normalized, validated mutable fields of an entry."""

    party: str
    item: str
    quantity: int
    status: str
    notes: Optional[str]


@dataclass(frozen=True)
class Snapshot:
    """Full persisted state: entries (newest inserted first) and party directory."""

    entries: tuple[Entry, ...] = ()
    parties: tuple[str, ...] = ()
    version: int = field(default=CURRENT_SCHEMA_VERSION)

    def find(self, entry_id: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def entry_ids(self) -> set[str]:
        return {entry.id for entry in self.entries}
