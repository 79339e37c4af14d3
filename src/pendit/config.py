"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from pendit.domain.errors import ValidationError
from pendit.domain.lifecycle import DEFAULT_CLOSING_STATUS, ResolveStrategy
from pendit.domain.query import SortOrder, parse_choice
from pendit.domain.state import DEFAULT_LEGACY_KEYS, DEFAULT_STORAGE_KEY
from pendit.domain.status import Phase, phase_of

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class TrackerConfig:
    """Settings for storage, ordering, resolution and logging."""

    database_path: Optional[str] = None
    storage_key: str = DEFAULT_STORAGE_KEY
    legacy_keys: tuple[str, ...] = field(default=DEFAULT_LEGACY_KEYS)
    sort_order: SortOrder = SortOrder.NEWEST
    resolve_strategy: ResolveStrategy = ResolveStrategy.ADVANCE
    closing_status: str = DEFAULT_CLOSING_STATUS
    export_delimiter: str = ","
    log_level: str = "WARNING"

    def with_overrides(self, **overrides) -> "TrackerConfig":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _split_keys(value: str) -> tuple[str, ...]:
    return tuple(key.strip() for key in value.split(",") if key.strip())


def load_config(environ: Optional[Mapping[str, str]] = None) -> TrackerConfig:
    """Build configuration from PENDIT_* environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        TrackerConfig

    Raises:
        ValidationError: If a setting has an invalid value
    """
    env = os.environ if environ is None else environ

    log_level = env.get("PENDIT_LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValidationError(f"Invalid log level '{log_level}'. Choose from: {', '.join(LOG_LEVELS)}")

    closing_status = env.get("PENDIT_CLOSING_STATUS", DEFAULT_CLOSING_STATUS).strip()
    if phase_of(closing_status) is not Phase.CLOSED:
        raise ValidationError(f"PENDIT_CLOSING_STATUS '{closing_status}' does not close an entry")

    delimiter = env.get("PENDIT_EXPORT_DELIMITER", ",")
    if delimiter == "\\t":
        delimiter = "\t"

    legacy_keys = DEFAULT_LEGACY_KEYS
    if "PENDIT_LEGACY_KEYS" in env:
        legacy_keys = _split_keys(env["PENDIT_LEGACY_KEYS"])

    return TrackerConfig(
        database_path=env.get("PENDIT_DB_PATH") or None,
        storage_key=env.get("PENDIT_STORAGE_KEY", DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY,
        legacy_keys=legacy_keys,
        sort_order=parse_choice(SortOrder, env.get("PENDIT_SORT_ORDER", SortOrder.NEWEST.value)),
        resolve_strategy=parse_choice(
            ResolveStrategy, env.get("PENDIT_RESOLVE_STRATEGY", ResolveStrategy.ADVANCE.value)
        ),
        closing_status=closing_status,
        export_delimiter=delimiter,
        log_level=log_level,
    )
