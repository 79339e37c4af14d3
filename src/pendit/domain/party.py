"""Party directory: previously seen counterparty names used for suggestions."""

from typing import Iterable, Optional


def normalize_parties(names: Iterable[Optional[str]]) -> tuple[str, ...]:
    """Trim, drop blanks, de-duplicate and sort party names."""
    cleaned = {name.strip() for name in names if isinstance(name, str) and name.strip()}
    return tuple(sorted(cleaned))


def learn_party(parties: tuple[str, ...], name: str) -> tuple[str, ...]:
    """Add a party name on first use; the directory never shrinks."""
    trimmed = name.strip()
    if not trimmed or trimmed in parties:
        return parties
    return tuple(sorted((*parties, trimmed)))


class PartyService:
    """Read access to the party directory."""

    def __init__(self, state):
        """Initialize party service.

        Args:
            state: TrackerState owning the live snapshot
        """
        self.state = state

    def list_parties(self) -> list[str]:
        return list(self.state.snapshot.parties)

    def suggest(self, prefix: str = "", limit: Optional[int] = None) -> list[str]:
        """Return known party names starting with prefix (case-insensitive).

        Args:
            prefix: Typed prefix; empty returns every name
            limit: Optional maximum number of suggestions

        Returns:
            Sorted list of matching names
        """
        needle = prefix.strip().lower()
        matches = [name for name in self.state.snapshot.parties if name.lower().startswith(needle)]
        if limit is not None:
            return matches[:limit]
        return matches
