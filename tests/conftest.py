"""Shared test fixtures for Life Tracker tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("ENCRYPTION_KEY", "")
    monkeypatch.setenv("DISCIPLINES_PATH", "")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from lifetrack.domains.habits.connectors.memory import InMemoryPersistence  # noqa: E402
from lifetrack.domains.habits.domain_logic.disciplines import DisciplineRegistry  # noqa: E402
from lifetrack.domains.habits.domain_logic.record_store import DailyRecordStore  # noqa: E402


@pytest.fixture
def registry() -> DisciplineRegistry:
    """The built-in catalog: software, gym, piano, sleeping, reading."""
    return DisciplineRegistry()


@pytest.fixture
def store(registry: DisciplineRegistry) -> DailyRecordStore:
    """An empty record store over the built-in catalog."""
    return DailyRecordStore(registry)


@pytest.fixture
def memory_persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


# ---------------------------------------------------------------------------
# In-memory storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tracker_db():
    """Create an in-memory TrackerDatabase for testing."""
    from lifetrack.core.storage.database import TrackerDatabase

    db = TrackerDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def field_encryptor():
    """Create a FieldEncryptor with a test key."""
    from cryptography.fernet import Fernet

    from lifetrack.core.storage.encryption import FieldEncryptor

    return FieldEncryptor(Fernet.generate_key().decode())


@pytest.fixture
def record_repository(tracker_db, field_encryptor):
    """Create a RecordRepository backed by in-memory SQLite."""
    from lifetrack.core.storage.repository import RecordRepository

    return RecordRepository(tracker_db, field_encryptor)
