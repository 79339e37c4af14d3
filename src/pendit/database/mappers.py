"""Mapper functions to convert between domain models and persisted payloads.

This layer isolates the serialization format, making it easy to change when
the snapshot schema changes. Payloads are plain JSON-compatible dicts; the
encoded form is deterministic so saving the same snapshot twice produces
byte-identical output.
"""

import json
from typing import Any

from pendit.domain import entities as domain
from pendit.domain.entry import normalize_fields
from pendit.domain.party import normalize_parties
from pendit.utils.date_parser import format_timestamp, parse_timestamp


def entry_to_payload(entry: domain.Entry) -> dict[str, Any]:
    """Convert a domain Entry to its persisted dict form."""
    return {
        "id": entry.id,
        "party": entry.party,
        "item": entry.item,
        "quantity": entry.quantity,
        "status": entry.status,
        "notes": entry.notes,
        "timestamp": format_timestamp(entry.timestamp),
    }


def payload_to_entry(data: dict[str, Any]) -> domain.Entry:
    """Convert a persisted dict to a domain Entry.

    Raises:
        ValueError: If the dict does not describe a valid entry
    """
    if not isinstance(data, dict):
        raise ValueError(f"Entry must be an object, got {type(data).__name__}")

    entry_id = data.get("id")
    if not isinstance(entry_id, str) or not entry_id:
        raise ValueError(f"Entry has no valid id: {data!r}")

    fields = normalize_fields(
        party=data.get("party"),
        item=data.get("item"),
        quantity=data.get("quantity"),
        status=data.get("status"),
        notes=data.get("notes"),
    )
    return domain.Entry(
        id=entry_id,
        party=fields.party,
        item=fields.item,
        quantity=fields.quantity,
        status=fields.status,
        notes=fields.notes,
        timestamp=parse_timestamp(data.get("timestamp")),
    )


def snapshot_to_payload(snapshot: domain.Snapshot) -> dict[str, Any]:
    """Convert a domain Snapshot to its persisted dict form."""
    return {
        "version": snapshot.version,
        "entries": [entry_to_payload(entry) for entry in snapshot.entries],
        "parties": list(snapshot.parties),
    }


def payload_to_snapshot(payload: dict[str, Any]) -> domain.Snapshot:
    """Convert a current-version payload to a domain Snapshot.

    Raises:
        ValueError: If the payload is not a current-version snapshot
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot must be an object, got {type(payload).__name__}")

    version = payload.get("version")
    if version != domain.CURRENT_SCHEMA_VERSION:
        raise ValueError(
            f"Snapshot version {version!r} is not current "
            f"(expected {domain.CURRENT_SCHEMA_VERSION}); migrate it first"
        )

    raw_entries = payload.get("entries") or []
    if not isinstance(raw_entries, list):
        raise ValueError("Snapshot entries must be a list")

    entries = tuple(payload_to_entry(item) for item in raw_entries)
    ids = [entry.id for entry in entries]
    if len(ids) != len(set(ids)):
        raise ValueError("Snapshot contains duplicate entry ids")

    raw_parties = payload.get("parties") or []
    if not isinstance(raw_parties, list):
        raise ValueError("Snapshot parties must be a list")

    return domain.Snapshot(entries=entries, parties=normalize_parties(raw_parties))


def encode_payload(payload: dict[str, Any]) -> str:
    """Serialize a payload dict deterministically."""
    return json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def decode_payload(text: str) -> dict[str, Any]:
    """Parse a serialized payload.

    Raises:
        ValueError: If the text is not a JSON object
    """
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot must be a JSON object, got {type(payload).__name__}")
    return payload


def encode_snapshot(snapshot: domain.Snapshot) -> str:
    """Serialize a snapshot deterministically."""
    return encode_payload(snapshot_to_payload(snapshot))


def decode_snapshot(text: str) -> domain.Snapshot:
    """Parse a serialized current-version snapshot.

    Raises:
        ValueError: If the text is malformed or not current-version
    """
    return payload_to_snapshot(decode_payload(text))
