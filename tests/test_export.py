"""Tests for CSV export."""

import csv
import io
import pytest
from datetime import date, datetime, UTC

from pendit.domain.entities import Entry
from pendit.domain.errors import ValidationError
from pendit.domain.export import (
    EXPORT_HEADERS,
    default_export_filename,
    export_csv,
    export_rows,
    write_csv,
)


def make_entry(**overrides):
    values = dict(
        id="e1",
        party="ABC Electronics",
        item="Laptop Charger",
        quantity=2,
        status="Collected for Repairing",
        notes=None,
        timestamp=datetime(2024, 1, 15, 9, 30, tzinfo=UTC),
    )
    values.update(overrides)
    return Entry(**values)


def test_export_rows():
    rows = export_rows([make_entry()])
    assert rows == [
        ["2024-01-15", "ABC Electronics", "Laptop Charger", "2", "Collected for Repairing", "pending", ""]
    ]


def test_export_csv_header_and_quoting():
    """Test fields containing the delimiter or quotes are quoted."""
    entry = make_entry(party='Smith, Jones & Co', notes='said "soon"', status="Given")
    content = export_csv([entry])
    lines = content.splitlines()

    assert lines[0] == ",".join(EXPORT_HEADERS)
    assert lines[1] == '2024-01-15,"Smith, Jones & Co",Laptop Charger,2,Given,closed,"said ""soon"""'


def test_export_csv_parses_back():
    entries = [make_entry(id="a", notes="line1\nline2"), make_entry(id="b", item="Cable; long")]
    rows = list(csv.reader(io.StringIO(export_csv(entries))))
    assert rows[1][6] == "line1\nline2"
    assert rows[2][2] == "Cable; long"


def test_export_csv_custom_delimiter():
    content = export_csv([make_entry(item="Cable; long")], delimiter=";")
    assert content.splitlines()[1] == '2024-01-15;ABC Electronics;"Cable; long";2;Collected for Repairing;pending;'


def test_export_empty_is_error():
    with pytest.raises(ValidationError, match="No entries to export"):
        export_csv([])


@pytest.mark.parametrize("delimiter", ["", ",,", '"'])
def test_export_invalid_delimiter(delimiter):
    with pytest.raises(ValidationError):
        export_csv([make_entry()], delimiter=delimiter)


def test_write_csv(tmp_path):
    path = tmp_path / "out.csv"
    count = write_csv([make_entry(), make_entry(id="e2")], path)
    assert count == 2
    assert path.read_text(encoding="utf-8").count("\n") == 3


def test_default_export_filename():
    assert default_export_filename(date(2024, 2, 3)) == "pending_export_2024-02-03.csv"
