"""Entry lifecycle service.

Phase is never stored: it follows from the status label via the status
registry. Transitions:

- create: a new entry enters at the phase implied by its initial status
- edit: all mutable fields replaced, id kept, timestamp bumped
- advance: status replaced by the registry follow-up (e.g. "Collected for
  Repairing" -> "Given"); unavailable when the status has no follow-up
- close: status forced to a closed-phase label without using the follow-up
- delete: permanent removal from any phase

Advance, close and delete ask the confirmation port first and leave the
state untouched when it answers no.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from loguru import logger

from pendit.domain.entities import Entry, Snapshot
from pendit.domain.entry import apply_edit, build_entry, normalize_fields, with_status
from pendit.domain.errors import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    already_closed,
    entry_not_found,
    no_follow_up,
    not_a_closing_status,
)
from pendit.domain.party import learn_party
from pendit.domain.state import TrackerState
from pendit.domain.status import Phase, StatusKind, classify, phase_of

Confirm = Callable[[str], bool]

DEFAULT_CLOSING_STATUS = StatusKind.GIVEN.value


class ResolveStrategy(str, Enum):
    """How the single "resolve" action settles a pending entry."""

    ADVANCE = "advance"
    CLOSE = "close"


class EntryAction(str, Enum):
    """Operations a renderer may offer for an entry."""

    EDIT = "edit"
    ADVANCE = "advance"
    CLOSE = "close"
    DELETE = "delete"


def always_confirm(prompt: str) -> bool:
    return True


def _replace_entry(snapshot: Snapshot, updated: Entry) -> Snapshot:
    entries = tuple(updated if entry.id == updated.id else entry for entry in snapshot.entries)
    return Snapshot(entries=entries, parties=snapshot.parties, version=snapshot.version)


class LifecycleService:
    """Service for creating, transitioning and deleting entries."""

    def __init__(
        self,
        state: TrackerState,
        confirm: Optional[Confirm] = None,
        resolve_strategy: ResolveStrategy = ResolveStrategy.ADVANCE,
        closing_status: str = DEFAULT_CLOSING_STATUS,
    ):
        """Initialize lifecycle service.

        Args:
            state: TrackerState owning the live snapshot
            confirm: Confirmation port asked before advance, close and delete
            resolve_strategy: Strategy used by resolve_entry
            closing_status: Status used by a direct close when none is given
        """
        self.state = state
        self.confirm = confirm or always_confirm
        self.resolve_strategy = ResolveStrategy(resolve_strategy)
        self.closing_status = closing_status

    def get_entry(self, entry_id: str) -> Optional[Entry]:
        """Get entry by ID.

        Returns:
            Entry or None if not found
        """
        return self.state.snapshot.find(entry_id)

    def require_entry(self, entry_id: str) -> Entry:
        """Get entry by ID or raise NotFoundError."""
        entry = self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def create_entry(
        self,
        party: Optional[str],
        item: Optional[str],
        quantity: Any,
        status: Optional[str],
        notes: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> Entry:
        """Create an entry and add it to the top of the collection.

        Args:
            party: Counterparty name
            item: Item description
            quantity: Raw quantity (defaults to 1 when unparsable)
            status: Initial status label
            notes: Optional notes
            timestamp: Optional entry time (defaults to now)

        Returns:
            The created entry

        Raises:
            ValidationError: If party, item or status is missing
            StoreError: If the snapshot cannot be saved (entry is kept in memory)
        """
        fields = normalize_fields(party, item, quantity, status, notes)
        snapshot = self.state.snapshot
        entry = build_entry(fields, timestamp=timestamp)
        while entry.id in snapshot.entry_ids():
            entry = build_entry(fields, timestamp=timestamp)

        self.state.commit(
            Snapshot(
                entries=(entry, *snapshot.entries),
                parties=learn_party(snapshot.parties, entry.party),
                version=snapshot.version,
            )
        )
        logger.info("Created entry {} ({}, {})", entry.id, entry.status, entry.phase.value)
        return entry

    def edit_entry(
        self,
        entry_id: str,
        party: Optional[str],
        item: Optional[str],
        quantity: Any,
        status: Optional[str],
        notes: Optional[str] = None,
    ) -> Entry:
        """Replace all mutable fields of an entry.

        The ID is preserved and the timestamp set to now, so edited entries
        resurface at the top of recency ordering.

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If party, item or status is missing
        """
        entry = self.require_entry(entry_id)
        fields = normalize_fields(party, item, quantity, status, notes)
        updated = apply_edit(entry, fields)

        snapshot = _replace_entry(self.state.snapshot, updated)
        self.state.commit(
            Snapshot(
                entries=snapshot.entries,
                parties=learn_party(snapshot.parties, updated.party),
                version=snapshot.version,
            )
        )
        logger.info("Edited entry {}", entry_id)
        return updated

    def can_advance(self, entry: Entry) -> bool:
        """Check whether the entry's status defines a follow-up."""
        return entry.status_info.follow_up is not None

    def available_actions(self, entry: Entry) -> list[EntryAction]:
        """Return the operations a renderer should offer for an entry."""
        actions = [EntryAction.EDIT]
        if self.can_advance(entry):
            actions.append(EntryAction.ADVANCE)
        if entry.is_pending:
            actions.append(EntryAction.CLOSE)
        actions.append(EntryAction.DELETE)
        return actions

    def advance_entry(self, entry_id: str) -> Optional[Entry]:
        """Move an entry to its follow-up status.

        Returns:
            The updated entry, or None if confirmation was declined

        Raises:
            NotFoundError: If the entry doesn't exist
            InvalidTransitionError: If the status has no follow-up
        """
        entry = self.require_entry(entry_id)
        follow_up = entry.status_info.follow_up
        if follow_up is None:
            raise InvalidTransitionError(no_follow_up(entry_id, entry.status))

        if not self.confirm(f"Mark '{entry.item}' for {entry.party} as '{follow_up}'?"):
            logger.debug("Advance of entry {} declined", entry_id)
            return None

        updated = with_status(entry, follow_up)
        self.state.commit(_replace_entry(self.state.snapshot, updated))
        logger.info("Advanced entry {}: {} -> {}", entry_id, entry.status, follow_up)
        return updated

    def close_entry(self, entry_id: str, closing_status: Optional[str] = None) -> Optional[Entry]:
        """Force a pending entry into a closed-phase status.

        Args:
            entry_id: Entry ID
            closing_status: Closed-phase label to apply (defaults to the
                service's closing status)

        Returns:
            The updated entry, or None if confirmation was declined

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If closing_status is not a closed-phase status
            InvalidTransitionError: If the entry is already closed
        """
        entry = self.require_entry(entry_id)
        closing_status = (closing_status or self.closing_status).strip()
        if phase_of(closing_status) is not Phase.CLOSED:
            raise ValidationError(not_a_closing_status(closing_status))
        if not entry.is_pending:
            raise InvalidTransitionError(already_closed(entry_id, entry.status))

        if not self.confirm(f"Close '{entry.item}' for {entry.party} as '{closing_status}'?"):
            logger.debug("Close of entry {} declined", entry_id)
            return None

        updated = with_status(entry, closing_status)
        self.state.commit(_replace_entry(self.state.snapshot, updated))
        logger.info("Closed entry {}: {} -> {}", entry_id, entry.status, closing_status)
        return updated

    def resolve_entry(self, entry_id: str) -> Optional[Entry]:
        """Resolve an entry with the configured strategy (advance or close)."""
        if self.resolve_strategy is ResolveStrategy.CLOSE:
            return self.close_entry(entry_id)
        return self.advance_entry(entry_id)

    def delete_entry(self, entry_id: str) -> bool:
        """Permanently delete an entry.

        Returns:
            True if deleted, False if confirmation was declined

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        entry = self.require_entry(entry_id)
        if not self.confirm(f"Delete '{entry.item}' for {entry.party}? This cannot be undone."):
            logger.debug("Delete of entry {} declined", entry_id)
            return False

        snapshot = self.state.snapshot
        self.state.commit(
            Snapshot(
                entries=tuple(e for e in snapshot.entries if e.id != entry_id),
                parties=snapshot.parties,
                version=snapshot.version,
            )
        )
        logger.info("Deleted entry {} ({})", entry_id, classify(entry.status).phase.value)
        return True
