"""Status registry.

Static table describing every recognized status label: the lifecycle phase
it puts an entry in, the follow-up status that resolves it, and a display
hint for renderers. Labels that are not in the table are tolerated and
classified as ``StatusKind.UNKNOWN`` (pending, no follow-up).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    """Derived lifecycle bucket of an entry."""

    PENDING = "pending"
    CLOSED = "closed"


class StatusKind(Enum):
    """Known statuses plus a fallback variant for anything else."""

    COLLECTED_FOR_REPAIRING = "Collected for Repairing"
    COLLECTED = "Collected"
    STANDBY_GIVEN = "Standby Given"
    STANDBY_COLLECTED = "Standby Collected"
    GIVEN = "Given"
    DELIVERED = "Delivered"
    UNKNOWN = None


@dataclass(frozen=True)
class StatusInfo:
    """Classification record for a status label."""

    kind: StatusKind
    label: str
    phase: Phase
    follow_up: Optional[str]
    display_hint: str

    @property
    def is_pending(self) -> bool:
        return self.phase is Phase.PENDING


@dataclass(frozen=True)
class _Rule:
    phase: Phase
    follow_up: Optional[StatusKind]
    display_hint: str


STATUS_REGISTRY: dict[StatusKind, _Rule] = {
    StatusKind.COLLECTED_FOR_REPAIRING: _Rule(Phase.PENDING, StatusKind.GIVEN, "repair"),
    StatusKind.COLLECTED: _Rule(Phase.PENDING, StatusKind.GIVEN, "collected"),
    StatusKind.STANDBY_GIVEN: _Rule(Phase.PENDING, StatusKind.STANDBY_COLLECTED, "standby"),
    StatusKind.STANDBY_COLLECTED: _Rule(Phase.CLOSED, None, "standby-returned"),
    StatusKind.GIVEN: _Rule(Phase.CLOSED, None, "given"),
    StatusKind.DELIVERED: _Rule(Phase.CLOSED, None, "delivered"),
    StatusKind.UNKNOWN: _Rule(Phase.PENDING, None, "unknown"),
}

_KINDS_BY_LABEL = {kind.value: kind for kind in StatusKind if kind is not StatusKind.UNKNOWN}


def status_kind(label: Optional[str]) -> StatusKind:
    """Return the registry variant for a label, ``UNKNOWN`` if unrecognized."""
    if label is None:
        return StatusKind.UNKNOWN
    return _KINDS_BY_LABEL.get(label, StatusKind.UNKNOWN)


def classify(label: Optional[str]) -> StatusInfo:
    """Classify a status label.

    Never fails: unrecognized labels silently get the pending fallback.

    Args:
        label: Stored status label

    Returns:
        StatusInfo for the label
    """
    kind = status_kind(label)
    rule = STATUS_REGISTRY[kind]
    follow_up = rule.follow_up.value if rule.follow_up is not None else None
    return StatusInfo(
        kind=kind,
        label=label or "",
        phase=rule.phase,
        follow_up=follow_up,
        display_hint=rule.display_hint,
    )


def phase_of(label: Optional[str]) -> Phase:
    """Return the lifecycle phase implied by a status label."""
    return classify(label).phase


def follow_up_of(label: Optional[str]) -> Optional[str]:
    """Return the follow-up status label, or None if the status has none."""
    return classify(label).follow_up


def display_hint(label: Optional[str]) -> str:
    """Return the display hint renderers use for a status label."""
    return classify(label).display_hint


def is_known_status(label: Optional[str]) -> bool:
    return status_kind(label) is not StatusKind.UNKNOWN


def known_statuses() -> list[str]:
    """Return all recognized status labels in registry order."""
    return [kind.value for kind in STATUS_REGISTRY if kind is not StatusKind.UNKNOWN]


def closing_statuses() -> list[str]:
    """Return the recognized labels that put an entry in the closed phase."""
    return [
        kind.value
        for kind, rule in STATUS_REGISTRY.items()
        if kind is not StatusKind.UNKNOWN and rule.phase is Phase.CLOSED
    ]
