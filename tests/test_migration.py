"""Tests for snapshot schema migrations."""

import json
import pytest
from datetime import UTC, datetime

from pendit.domain.entities import CURRENT_SCHEMA_VERSION
from pendit.domain.migration import (
    BINARY_SCHEMA_VERSION,
    JOB_TYPE_SCHEMA_VERSION,
    MISSING_ITEM,
    MISSING_PARTY,
    MISSING_TIMESTAMP,
    detect_version,
    legacy_status,
    migrate_binary_to_job_type,
    migrate_job_type_to_status,
    migrate_payload,
    needs_migration,
)
from pendit.domain.state import parse_snapshot
from pendit.domain.status import Phase


def job_type_payload(*entries, parties=None):
    return {"version": 2, "entries": list(entries), "parties": parties or []}


def job_type_entry(**overrides):
    entry = {
        "id": "old1",
        "party": "ABC",
        "item": "Phone",
        "qty": 2,
        "jobType": "repair",
        "status": "pending",
        "notes": "cracked",
        "timestamp": "2023-05-01T10:00:00+00:00",
    }
    entry.update(overrides)
    return entry


class TestLegacyStatus:
    """Tests for the job-type to status label mapping."""

    @pytest.mark.parametrize(
        "status, job_type, expected",
        [
            ("closed", "repair", "Given"),
            ("closed", "standby", "Given"),
            ("closed", None, "Given"),
            ("pending", "repair", "Collected for Repairing"),
            ("pending", "collected", "Collected for Repairing"),
            ("pending", "standby", "Standby Given"),
            ("pending", "given", "Standby Given"),
            ("pending", "sale", "Given"),
            ("pending", "delivery", "Given"),
            ("Pending", "Repair", "Collected for Repairing"),
            ("pending", "mystery", "Collected"),
            ("weird", "repair", "Collected"),
            (None, None, "Collected"),
        ],
    )
    def test_mapping(self, status, job_type, expected):
        assert legacy_status(status, job_type) == expected


class TestDetectVersion:
    def test_explicit_version(self):
        assert detect_version({"version": 3, "entries": []}) == 3
        assert detect_version({"version": 2, "entries": []}) == 2

    def test_job_type_without_version(self):
        assert detect_version({"entries": [{"jobType": "repair"}]}) == JOB_TYPE_SCHEMA_VERSION

    def test_binary_without_version(self):
        assert detect_version({"entries": [{"action": "Collected"}]}) == BINARY_SCHEMA_VERSION
        assert detect_version({}) == BINARY_SCHEMA_VERSION

    @pytest.mark.parametrize("payload", [[], "x", {"version": "3"}, {"version": True}])
    def test_invalid(self, payload):
        with pytest.raises(ValueError):
            detect_version(payload)

    def test_needs_migration(self):
        assert needs_migration({"version": 2, "entries": []})
        assert not needs_migration({"version": CURRENT_SCHEMA_VERSION, "entries": []})


class TestJobTypeToStatus:
    """Tests for the v2 to v3 step."""

    def test_carries_fields_verbatim(self):
        migrated = migrate_job_type_to_status(job_type_payload(job_type_entry(), parties=["ABC"]))

        assert migrated["version"] == CURRENT_SCHEMA_VERSION
        assert migrated["entries"] == [
            {
                "id": "old1",
                "party": "ABC",
                "item": "Phone",
                "quantity": 2,
                "status": "Collected for Repairing",
                "notes": "cracked",
                "timestamp": "2023-05-01T10:00:00+00:00",
            }
        ]
        assert migrated["parties"] == ["ABC"]

    def test_missing_ids_are_generated_uniquely(self):
        payload = job_type_payload(
            job_type_entry(id=None),
            job_type_entry(id="legacy-0"),
            job_type_entry(id=""),
        )
        ids = [entry["id"] for entry in migrate_job_type_to_status(payload)["entries"]]
        assert len(set(ids)) == 3
        assert all(ids)
        assert ids[1] == "legacy-0"

    def test_incomplete_entries_are_kept(self):
        """Test blank party, item and timestamp get placeholders instead of failing."""
        payload = job_type_payload(
            job_type_entry(id="a", party="  ", item=None, timestamp=""),
            job_type_entry(id="b", timestamp="not a date"),
            job_type_entry(id="c", timestamp=None),
        )
        entries = migrate_job_type_to_status(payload)["entries"]

        assert entries[0]["party"] == MISSING_PARTY
        assert entries[0]["item"] == MISSING_ITEM
        assert [e["timestamp"] for e in entries] == [MISSING_TIMESTAMP] * 3

    def test_duplicate_and_numeric_ids(self):
        payload = job_type_payload(job_type_entry(id="dup"), job_type_entry(id="dup"), job_type_entry(id=7))
        ids = [entry["id"] for entry in migrate_job_type_to_status(payload)["entries"]]
        assert ids == ["dup", "legacy-1", "7"]

    def test_parties_are_deduplicated(self):
        payload = job_type_payload(parties=["Zed", " ABC ", "Zed", ""])
        assert migrate_job_type_to_status(payload)["parties"] == ["ABC", "Zed"]


class TestBinaryToJobType:
    """Tests for the v1 to v2 step."""

    def test_action_and_binary_status(self):
        payload = {
            "entries": [
                {"id": "a", "party": "P", "item": "I", "qty": 1, "action": "Collected", "status": "Open", "date": "2022-01-02"},
                {"id": "b", "party": "P", "item": "I", "qty": 1, "action": "Given", "status": "Closed", "date": "2022-01-03"},
            ],
            "parties": ["P"],
        }
        migrated = migrate_binary_to_job_type(payload)

        assert migrated["version"] == JOB_TYPE_SCHEMA_VERSION
        assert [(e["jobType"], e["status"]) for e in migrated["entries"]] == [
            ("repair", "pending"),
            ("standby", "closed"),
        ]
        assert migrated["entries"][0]["timestamp"] == "2022-01-02"


class TestMigratePayload:
    """Tests for the transitive migration chain."""

    def test_v2_chain(self):
        payload = job_type_payload(
            job_type_entry(id="a", jobType="repair", status="pending"),
            job_type_entry(id="b", jobType="standby", status="pending"),
            job_type_entry(id="c", jobType="repair", status="closed"),
        )
        migrated = migrate_payload(payload)
        assert [e["status"] for e in migrated["entries"]] == [
            "Collected for Repairing",
            "Standby Given",
            "Given",
        ]

    def test_v1_chain(self):
        payload = {
            "entries": [
                {"id": "a", "party": "P", "item": "I", "qty": 3, "action": "Collected", "status": "Open", "date": "2022-01-02"},
                {"id": "b", "party": "P", "item": "I", "qty": 1, "action": "Given", "status": "Open", "date": "2022-01-02"},
                {"id": "c", "party": "P", "item": "I", "qty": 1, "action": "Delivered", "status": "Open", "date": "2022-01-02"},
                {"id": "d", "party": "P", "item": "I", "qty": 1, "action": "Pending", "status": "Open", "date": "2022-01-02"},
                {"id": "e", "party": "P", "item": "I", "qty": 1, "action": "Collected", "status": "Closed", "date": "2022-01-02"},
            ]
        }
        migrated = migrate_payload(payload)
        assert migrated["version"] == CURRENT_SCHEMA_VERSION
        assert [e["status"] for e in migrated["entries"]] == [
            "Collected for Repairing",
            "Standby Given",
            "Given",
            "Collected",
            "Given",
        ]
        assert migrated["entries"][0]["quantity"] == 3

    def test_current_payload_unchanged(self):
        payload = {"version": CURRENT_SCHEMA_VERSION, "entries": [], "parties": []}
        assert migrate_payload(payload) is payload

    def test_idempotent(self):
        once = migrate_payload(job_type_payload(job_type_entry()))
        assert migrate_payload(once) == once

    def test_newer_version_rejected(self):
        with pytest.raises(ValueError, match="newer"):
            migrate_payload({"version": 99, "entries": []})

    def test_unknown_old_version_rejected(self):
        with pytest.raises(ValueError):
            migrate_payload({"version": 0, "entries": []})

    def test_entries_must_be_objects(self):
        with pytest.raises(ValueError):
            migrate_payload({"version": 2, "entries": ["nope"]})


class TestParseSnapshot:
    """Tests for decoding serialized data of any version."""

    def test_migrated_snapshot_is_valid(self):
        text = json.dumps(job_type_payload(job_type_entry(qty="many"), parties=["ABC"]))
        snapshot, migrated = parse_snapshot(text)

        assert migrated
        entry = snapshot.entries[0]
        assert entry.id == "old1"
        assert entry.quantity == 1
        assert entry.phase is Phase.PENDING
        assert entry.timestamp.year == 2023
        assert snapshot.parties == ("ABC",)

    def test_binary_entry_without_date_is_kept(self):
        text = json.dumps(
            {
                "entries": [
                    {"id": "a", "party": "ABC", "item": "Phone", "qty": 1, "action": "Collected",
                     "status": "Open", "date": ""},
                    {"id": "b", "party": "", "item": "Cable", "qty": 1, "action": "Given",
                     "status": "Closed", "date": "2022-01-02"},
                ],
                "parties": ["ABC"],
            }
        )
        snapshot, migrated = parse_snapshot(text)

        assert migrated
        assert [e.id for e in snapshot.entries] == ["a", "b"]
        assert snapshot.entries[0].timestamp == datetime(1970, 1, 1, tzinfo=UTC)
        assert snapshot.entries[1].party == MISSING_PARTY

    def test_current_snapshot_not_flagged(self):
        text = json.dumps({"version": 3, "entries": [], "parties": []})
        snapshot, migrated = parse_snapshot(text)
        assert not migrated
        assert snapshot.entries == ()

    @pytest.mark.parametrize("text", ["not json", "[]", '{"version": 3, "entries": [{"id": "x"}]}'])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_snapshot(text)
