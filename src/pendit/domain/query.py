"""Entry filtering and ordering."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from pendit.domain.entities import Entry
from pendit.domain.errors import ValidationError
from pendit.domain.status import Phase


class PhaseFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    CLOSED = "closed"


class SortOrder(str, Enum):
    """Ordering of query results.

    NEWEST: newest first by timestamp
    OLDEST: oldest first by timestamp
    URGENCY: pending entries oldest first, then closed entries newest first
    """

    NEWEST = "newest"
    OLDEST = "oldest"
    URGENCY = "urgency"


def parse_choice(enum_type, value):
    """Convert a string to an enum member, raising ValidationError if unknown."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"Invalid value '{value}'. Choose from: {choices}")


@dataclass(frozen=True)
class EntryQuery:
    """Filter and ordering options for listing entries."""

    phase: PhaseFilter = PhaseFilter.ALL
    search: str = ""
    status: Optional[str] = None
    order: SortOrder = SortOrder.NEWEST


def searchable_text(entry: Entry) -> str:
    return " ".join([entry.party, entry.item, entry.notes or ""]).lower()


def matches(entry: Entry, query: EntryQuery) -> bool:
    """Check an entry against phase, status and search filters.

    Phase is compared on the derived phase, so results follow the status
    registry without any stored phase field.
    """
    if query.phase is not PhaseFilter.ALL and entry.phase.value != query.phase.value:
        return False
    if query.status is not None and entry.status != query.status:
        return False
    term = query.search.strip().lower()
    if term and term not in searchable_text(entry):
        return False
    return True


def sort_entries(entries: Iterable[Entry], order: SortOrder) -> list[Entry]:
    """Sort entries by timestamp; ties keep collection order."""
    entries = list(entries)
    if order is SortOrder.OLDEST:
        return sorted(entries, key=lambda e: e.timestamp)
    if order is SortOrder.URGENCY:
        pending = sorted((e for e in entries if e.phase is Phase.PENDING), key=lambda e: e.timestamp)
        closed = sorted(
            (e for e in entries if e.phase is not Phase.PENDING),
            key=lambda e: e.timestamp,
            reverse=True,
        )
        return pending + closed
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


def filter_entries(entries: Iterable[Entry], query: EntryQuery) -> list[Entry]:
    """Return the entries matching query, in the query's order."""
    return sort_entries((entry for entry in entries if matches(entry, query)), query.order)


class EntryView:
    """Restartable view of a query over the live state.

    Each iteration recomputes the result from the current snapshot, so a view
    created before a mutation reflects it when iterated afterwards.
    """

    def __init__(self, state, query: EntryQuery):
        self.state = state
        self.query = query

    def __iter__(self) -> Iterator[Entry]:
        return iter(filter_entries(self.state.snapshot.entries, self.query))

    def __len__(self) -> int:
        return len(filter_entries(self.state.snapshot.entries, self.query))


class QueryService:
    """Service for listing entries."""

    def __init__(self, state, default_order: SortOrder = SortOrder.NEWEST):
        """Initialize query service.

        Args:
            state: TrackerState owning the live snapshot
            default_order: Ordering used when a caller does not pick one
        """
        self.state = state
        self.default_order = SortOrder(default_order)

    def build_query(
        self,
        phase: PhaseFilter | str = PhaseFilter.ALL,
        search: Optional[str] = None,
        status: Optional[str] = None,
        order: Optional[SortOrder | str] = None,
    ) -> EntryQuery:
        """Build a query from raw option values.

        Raises:
            ValidationError: If phase or order is not a recognized value
        """
        return EntryQuery(
            phase=parse_choice(PhaseFilter, phase),
            search=search or "",
            status=status.strip() if status and status.strip() else None,
            order=parse_choice(SortOrder, order) if order is not None else self.default_order,
        )

    def view(self, query: Optional[EntryQuery] = None) -> EntryView:
        return EntryView(self.state, query or EntryQuery(order=self.default_order))

    def list_entries(self, query: Optional[EntryQuery] = None) -> list[Entry]:
        """List entries matching a query (all entries by default)."""
        return list(self.view(query))

    def pending_entries(self, order: Optional[SortOrder] = None) -> list[Entry]:
        """List only pending entries, with no search term applied."""
        return self.list_entries(
            EntryQuery(phase=PhaseFilter.PENDING, order=order or self.default_order)
        )

    def counts(self) -> dict[str, int]:
        """Count entries per phase."""
        entries = self.state.snapshot.entries
        pending = sum(1 for entry in entries if entry.is_pending)
        return {
            PhaseFilter.ALL.value: len(entries),
            PhaseFilter.PENDING.value: pending,
            PhaseFilter.CLOSED.value: len(entries) - pending,
        }
