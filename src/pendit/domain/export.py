"""CSV export of entry listings."""

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from pendit.domain.entities import Entry
from pendit.domain.errors import ValidationError

EXPORT_HEADERS = ("Date", "Party", "Item", "Quantity", "Status", "Phase", "Notes")


def export_rows(entries: Iterable[Entry]) -> list[list[str]]:
    """Convert entries to export rows in EXPORT_HEADERS order."""
    return [
        [
            entry.timestamp.date().isoformat(),
            entry.party,
            entry.item,
            str(entry.quantity),
            entry.status,
            entry.phase.value,
            entry.notes or "",
        ]
        for entry in entries
    ]


def export_csv(entries: Iterable[Entry], delimiter: str = ",") -> str:
    """Render entries as delimited text with a header row.

    Fields containing the delimiter, a quote character or a line break are
    quoted.

    Raises:
        ValidationError: If there are no entries or the delimiter is invalid
    """
    if len(delimiter) != 1 or delimiter in ('"', "\n", "\r"):
        raise ValidationError(f"Invalid delimiter {delimiter!r}: must be a single character")

    rows = export_rows(entries)
    if not rows:
        raise ValidationError("No entries to export")

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(rows)
    return buffer.getvalue()


def default_export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"pending_export_{today.isoformat()}.csv"


def write_csv(entries: Iterable[Entry], path: str | Path, delimiter: str = ",") -> int:
    """Write entries to a CSV file.

    Returns:
        Number of entries written
    """
    entries = list(entries)
    content = export_csv(entries, delimiter=delimiter)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return len(entries)
