"""Tests for TrackerDatabase: schema creation, versioning, lifecycle."""

from __future__ import annotations

import pytest

from lifetrack.core.storage.database import SCHEMA_VERSION, DatabaseError, TrackerDatabase


class TestInitialization:
    def test_in_memory_initialize(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        assert db.connection is not None
        db.close()

    def test_double_initialize_is_idempotent(self):
        db = TrackerDatabase(":memory:")
        db.initialize()
        conn1 = db.connection
        db.initialize()  # Should not raise or create a new connection
        assert db.connection is conn1
        db.close()

    def test_connection_before_init_raises(self):
        db = TrackerDatabase(":memory:")
        with pytest.raises(DatabaseError, match="not initialized"):
            _ = db.connection

    def test_context_manager(self):
        with TrackerDatabase(":memory:") as db:
            assert db.connection is not None
        with pytest.raises(DatabaseError):
            _ = db.connection

    def test_file_database_creates_parent_dirs(self, tmp_path):
        db_path = tmp_path / "a" / "b" / "tracker.db"
        with TrackerDatabase(str(db_path)):
            pass
        assert db_path.exists()


class TestSchema:
    def test_schema_version_recorded(self):
        with TrackerDatabase(":memory:") as db:
            assert db.get_schema_version() == SCHEMA_VERSION

    def test_reopen_does_not_duplicate_version(self, tmp_path):
        db_path = str(tmp_path / "tracker.db")
        with TrackerDatabase(db_path):
            pass
        with TrackerDatabase(db_path) as db:
            count = db.connection.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
            assert count == 1

    def test_tables_created(self):
        with TrackerDatabase(":memory:") as db:
            cursor = db.connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            tables = {row[0] for row in cursor.fetchall()}
            assert {"daily_records", "schema_version"} <= tables

    def test_indexes_created(self):
        with TrackerDatabase(":memory:") as db:
            cursor = db.connection.execute(
                "SELECT name FROM sqlite_master WHERE type='index'"
            )
            indexes = {row[0] for row in cursor.fetchall()}
            assert "idx_records_updated" in indexes

    def test_foreign_keys_enabled(self):
        with TrackerDatabase(":memory:") as db:
            cursor = db.connection.execute("PRAGMA foreign_keys")
            assert cursor.fetchone()[0] == 1

    def test_wal_mode_enabled(self):
        with TrackerDatabase(":memory:") as db:
            cursor = db.connection.execute("PRAGMA journal_mode")
            mode = cursor.fetchone()[0].lower()
            # In-memory databases may use 'memory' mode instead of 'wal'
            assert mode in ("wal", "memory")
