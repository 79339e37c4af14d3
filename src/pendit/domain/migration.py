"""Snapshot schema migrations.

Persisted payloads went through three status models:

1. Binary model (no ``version`` key): each entry has an ``action``
   (Pending/Collected/Given/Delivered), a binary ``status`` (Open/Closed),
   a ``qty`` and a ``date``.
2. Job-type model (``version: 2``): ``jobType`` (repair/standby/sale/...)
   plus a ``pending``/``closed`` status, ``qty`` and ``timestamp``.
3. Current model (``version: 3``): a single free-form ``status`` label
   interpreted through the status registry, ``quantity`` and ``timestamp``.

Migrations work on the raw JSON payload and are applied transitively in
``MIGRATIONS`` order until the current version is reached. Identity and
content fields (id, party, item, quantity, notes, timestamp) are carried
over verbatim; only the status is recomputed. Legacy entries are never
dropped: a missing or duplicate id gets a ``legacy-N`` id, a blank party or
item gets a placeholder and an unusable timestamp becomes the epoch.
"""

from typing import Any, Callable

from loguru import logger

from pendit.domain.entities import CURRENT_SCHEMA_VERSION
from pendit.domain.party import normalize_parties
from pendit.domain.status import StatusKind
from pendit.utils.date_parser import parse_timestamp

Payload = dict[str, Any]

BINARY_SCHEMA_VERSION = 1
JOB_TYPE_SCHEMA_VERSION = 2

# Placeholders for legacy entries that lack a required field
MISSING_PARTY = "Unknown party"
MISSING_ITEM = "Unknown item"
MISSING_TIMESTAMP = "1970-01-01T00:00:00+00:00"

# Binary model -> job-type model
BINARY_STATUS_PHASES = {"open": "pending", "closed": "closed"}
ACTION_JOB_TYPES = {
    "collected": "repair",
    "given": "standby",
    "delivered": "delivery",
}

# Job-type model -> current model
CLOSED_SIGNALS = {"closed", "close", "done", "complete", "completed", "resolved"}
PENDING_SIGNALS = {"pending", "open", "opened"}
REPAIR_JOB_TYPES = {"repair", "repairing", "collected", "collect"}
STANDBY_JOB_TYPES = {"standby", "given", "give", "loan"}
SALE_JOB_TYPES = {"sale", "sold", "delivery", "delivered"}


def _entries(payload: Payload) -> list[Any]:
    entries = payload.get("entries") or []
    if not isinstance(entries, list):
        raise ValueError("Snapshot entries must be a list")
    for raw in entries:
        if not isinstance(raw, dict):
            raise ValueError(f"Entry must be an object, got {type(raw).__name__}")
    return entries


def _parties(payload: Payload) -> list[str]:
    parties = payload.get("parties") or []
    if not isinstance(parties, list):
        raise ValueError("Snapshot parties must be a list")
    return list(normalize_parties(parties))


def _signal(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def _text_or(value: Any, placeholder: str) -> Any:
    if value is None or not str(value).strip():
        return placeholder
    return value


def _legacy_timestamp(value: Any, entry_id: str) -> Any:
    """Keep a parsable legacy timestamp as-is; replace anything else with the epoch."""
    try:
        parse_timestamp(value)
    except ValueError:
        logger.warning("Entry {} has no usable timestamp ({!r}); using {}", entry_id, value, MISSING_TIMESTAMP)
        return MISSING_TIMESTAMP
    return value


def detect_version(payload: Payload) -> int:
    """Detect the schema version of a raw payload.

    Raises:
        ValueError: If the payload is not a snapshot object
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot must be an object, got {type(payload).__name__}")

    if "version" in payload:
        version = payload["version"]
        if isinstance(version, bool) or not isinstance(version, int):
            raise ValueError(f"Invalid snapshot version {version!r}")
        return version

    if any("jobType" in raw for raw in _entries(payload)):
        return JOB_TYPE_SCHEMA_VERSION
    return BINARY_SCHEMA_VERSION


def needs_migration(payload: Payload) -> bool:
    return detect_version(payload) != CURRENT_SCHEMA_VERSION


def legacy_status(status: Any, job_type: Any) -> str:
    """Map a job-type model status pair onto a current status label.

    | Old signal                                   | New status              |
    |----------------------------------------------|-------------------------|
    | closed (any job type)                        | Given                   |
    | pending + repair/"collected"                 | Collected for Repairing |
    | pending + standby/"given, awaiting return"   | Standby Given           |
    | pending + sale/delivery                      | Given                   |
    | anything unrecognized                        | Collected               |
    """
    phase = _signal(status)
    job = _signal(job_type)

    if phase in CLOSED_SIGNALS:
        return StatusKind.GIVEN.value
    if phase in PENDING_SIGNALS:
        if job in REPAIR_JOB_TYPES:
            return StatusKind.COLLECTED_FOR_REPAIRING.value
        if job in STANDBY_JOB_TYPES:
            return StatusKind.STANDBY_GIVEN.value
        if job in SALE_JOB_TYPES:
            # A sale left pending is an anomaly: the item is already gone.
            return StatusKind.GIVEN.value
    return StatusKind.COLLECTED.value


def migrate_binary_to_job_type(payload: Payload) -> Payload:
    """v1 -> v2: derive a job type from the action, pending/closed from Open/Closed."""
    entries = []
    for raw in _entries(payload):
        action = raw.get("action")
        status = raw.get("status")
        entries.append(
            {
                "id": raw.get("id"),
                "party": raw.get("party"),
                "item": raw.get("item"),
                "qty": raw.get("qty", raw.get("quantity")),
                "jobType": ACTION_JOB_TYPES.get(_signal(action), action),
                "status": BINARY_STATUS_PHASES.get(_signal(status), status),
                "notes": raw.get("notes"),
                "timestamp": raw.get("timestamp", raw.get("date")),
            }
        )
    return {"version": JOB_TYPE_SCHEMA_VERSION, "entries": entries, "parties": _parties(payload)}


def migrate_job_type_to_status(payload: Payload) -> Payload:
    """v2 -> v3: collapse job type + phase into a single registry status label."""
    raw_entries = _entries(payload)
    raw_ids = [_text_or(raw.get("id"), "") for raw in raw_entries]
    taken = {str(raw_id).strip() for raw_id in raw_ids if raw_id}
    seen = set()
    entries = []
    for index, (raw, raw_id) in enumerate(zip(raw_entries, raw_ids)):
        entry_id = str(raw_id).strip()
        if not entry_id or entry_id in seen:
            entry_id = f"legacy-{index}"
            while entry_id in taken:
                entry_id += "x"
            taken.add(entry_id)
        seen.add(entry_id)
        entries.append(
            {
                "id": entry_id,
                "party": _text_or(raw.get("party"), MISSING_PARTY),
                "item": _text_or(raw.get("item"), MISSING_ITEM),
                "quantity": raw.get("qty", raw.get("quantity")),
                "status": legacy_status(raw.get("status"), raw.get("jobType")),
                "notes": raw.get("notes"),
                "timestamp": _legacy_timestamp(raw.get("timestamp"), entry_id),
            }
        )
    return {"version": CURRENT_SCHEMA_VERSION, "entries": entries, "parties": _parties(payload)}


MIGRATIONS: list[tuple[int, Callable[[Payload], Payload]]] = [
    (BINARY_SCHEMA_VERSION, migrate_binary_to_job_type),
    (JOB_TYPE_SCHEMA_VERSION, migrate_job_type_to_status),
]


def migrate_payload(payload: Payload) -> Payload:
    """Upgrade a raw payload to the current schema version.

    Current payloads are returned unchanged, so re-running on migrated data
    is a no-op.

    Args:
        payload: Raw decoded snapshot payload of any known version

    Returns:
        Payload in the current schema version

    Raises:
        ValueError: If the payload is malformed or its version is unsupported
    """
    version = detect_version(payload)
    if version == CURRENT_SCHEMA_VERSION:
        return payload
    if version > CURRENT_SCHEMA_VERSION:
        raise ValueError(
            f"Snapshot version {version} is newer than supported version {CURRENT_SCHEMA_VERSION}"
        )

    for source_version, migrate in MIGRATIONS:
        if version == source_version:
            payload = migrate(payload)
            logger.info(
                "Migrated snapshot from v{} to v{} ({} entries)",
                source_version,
                payload["version"],
                len(payload["entries"]),
            )
            version = payload["version"]

    if version != CURRENT_SCHEMA_VERSION:
        raise ValueError(f"No migration path from snapshot version {version}")
    return payload
