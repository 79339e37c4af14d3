"""Entry construction and edit rules."""

import dataclasses
import secrets
import time
from datetime import UTC, datetime
from typing import Any, Optional

from pendit.domain.entities import Entry, EntryFields
from pendit.domain.errors import ValidationError, required_field
from pendit.utils.quantity_parser import parse_quantity

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
ID_SUFFIX_LENGTH = 9


def _to_base36(number: int) -> str:
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
        if number == 0:
            break
    return "".join(reversed(digits))


def new_entry_id() -> str:
    """Generate an opaque entry ID: base-36 millisecond clock + random suffix."""
    prefix = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ID_SUFFIX_LENGTH))
    return prefix + suffix


def _clean(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def normalize_fields(
    party: Optional[str],
    item: Optional[str],
    quantity: Any,
    status: Optional[str],
    notes: Optional[str] = None,
) -> EntryFields:
    """Validate and normalize raw submitted entry fields.

    Args:
        party: Counterparty name (required)
        item: Item description (required)
        quantity: Raw quantity; unparsable or non-positive values become 1
        status: Status label from a controlled selection (required)
        notes: Optional notes

    Returns:
        EntryFields with trimmed text

    Raises:
        ValidationError: If party, item or status is missing
    """
    party = _clean(party)
    item = _clean(item)
    status = _clean(status)

    if not party:
        raise ValidationError(required_field("Party"))
    if not item:
        raise ValidationError(required_field("Item"))
    if not status:
        raise ValidationError(required_field("Status"))

    return EntryFields(
        party=party,
        item=item,
        quantity=parse_quantity(quantity),
        status=status,
        notes=_clean(notes) or None,
    )


def build_entry(
    fields: EntryFields,
    timestamp: Optional[datetime] = None,
    entry_id: Optional[str] = None,
) -> Entry:
    """Create a new Entry from normalized fields."""
    return Entry(
        id=entry_id or new_entry_id(),
        party=fields.party,
        item=fields.item,
        quantity=fields.quantity,
        status=fields.status,
        notes=fields.notes,
        timestamp=timestamp or datetime.now(UTC),
    )


def apply_edit(entry: Entry, fields: EntryFields, now: Optional[datetime] = None) -> Entry:
    """Replace all mutable fields of an entry, keep its ID and bump recency."""
    return dataclasses.replace(
        entry,
        party=fields.party,
        item=fields.item,
        quantity=fields.quantity,
        status=fields.status,
        notes=fields.notes,
        timestamp=now or datetime.now(UTC),
    )


def with_status(entry: Entry, status: str) -> Entry:
    """Return the entry with only its status replaced."""
    return dataclasses.replace(entry, status=status)
