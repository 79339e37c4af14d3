"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested entry does not exist (it may already have been removed)."""


class InvalidTransitionError(DomainError):
    """Requested lifecycle transition is not available for the entry."""


class StoreError(RuntimeError):
    """Reading or writing the persisted snapshot failed."""


def entry_not_found(entry_id: str) -> str:
    """Return message for missing entry."""
    return f"Entry '{entry_id}' not found"


def required_field(field_name: str) -> str:
    """Return message for a required field left empty."""
    return f"{field_name} is required"


def no_follow_up(entry_id: str, status: str) -> str:
    """Return message when a status has no follow-up to advance to."""
    return f"Entry '{entry_id}' cannot be advanced: status '{status}' has no follow-up"


def already_closed(entry_id: str, status: str) -> str:
    """Return message when closing an entry that is already closed."""
    return f"Entry '{entry_id}' is already closed (status '{status}')"


def not_a_closing_status(status: str) -> str:
    """Return message when a direct close targets a pending-phase status."""
    return f"Status '{status}' does not close an entry"
