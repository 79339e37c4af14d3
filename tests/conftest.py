"""Shared pytest fixtures for pendit tests."""

import tempfile
import os
from datetime import UTC, datetime, timedelta
import pytest

from pendit.database.factories import create_sqlite_store
from pendit.domain.lifecycle import LifecycleService
from pendit.domain.party import PartyService
from pendit.domain.query import QueryService
from pendit.domain.state import TrackerState


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep PENDIT_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("PENDIT_"):
            monkeypatch.delenv(name)


@pytest.fixture
def temp_store():
    """Create a temporary SQLite snapshot store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def state(temp_store):
    """Create an empty TrackerState backed by the temporary store."""
    return TrackerState.open(temp_store)


@pytest.fixture
def lifecycle_service(state):
    """Create a LifecycleService that always confirms."""
    return LifecycleService(state)


@pytest.fixture
def query_service(state):
    """Create a QueryService over the temporary state."""
    return QueryService(state)


@pytest.fixture
def party_service(state):
    """Create a PartyService over the temporary state."""
    return PartyService(state)


@pytest.fixture
def base_time():
    """Fixed reference time for ordering tests."""
    return datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_entries(lifecycle_service, base_time):
    """Create three entries, one per interesting status, a day apart."""
    given = lifecycle_service.create_entry(
        party="ABC Electronics",
        item="Laptop Charger",
        quantity=2,
        status="Given",
        notes="Returned after repair",
        timestamp=base_time,
    )
    collected = lifecycle_service.create_entry(
        party="XYZ Supplies",
        item="Printer Cartridges",
        quantity=5,
        status="Collected",
        timestamp=base_time + timedelta(days=1),
    )
    standby = lifecycle_service.create_entry(
        party="Tech Solutions",
        item="Standby Phone",
        quantity=1,
        status="Standby Given",
        notes="Loaner while screen is replaced",
        timestamp=base_time + timedelta(days=2),
    )
    return {"given": given, "collected": collected, "standby": standby}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
