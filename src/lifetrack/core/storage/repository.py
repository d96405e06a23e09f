"""Daily record repository: the encrypted SQLite record bank.

The repository mediates between :class:`DailyRecord` objects and the SQLite
database, using FieldEncryptor to encrypt/decrypt each date's values. It
implements the RecordPersistence interface (``load``/``save``).
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any

from lifetrack.core.storage.database import TrackerDatabase
from lifetrack.core.storage.encryption import FieldEncryptor
from lifetrack.domains.habits.domain_logic.models import DailyRecord

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Raised when repository operations fail."""


class RecordRepository:
    """Persistence for daily records, one encrypted row per date.

    Usage::

        db = TrackerDatabase(":memory:")
        db.initialize()
        encryptor = FieldEncryptor(key="...")
        repo = RecordRepository(db, encryptor)

        repo.save(store.snapshot())
        records = repo.load()
    """

    def __init__(self, database: TrackerDatabase, encryptor: FieldEncryptor) -> None:
        self._db = database
        self._enc = encryptor

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(timezone.utc).isoformat()

    @property
    def backend(self) -> str:
        return "sqlite"

    # ------------------------------------------------------------------
    # Whole-store persistence
    # ------------------------------------------------------------------

    def load(self) -> dict[str, DailyRecord]:
        """Return every stored record, decrypted, keyed by date."""
        rows = self._db.connection.execute(
            "SELECT record_date, values_enc FROM daily_records ORDER BY record_date"
        ).fetchall()
        return {row["record_date"]: self._row_to_record(row) for row in rows}

    def save(self, records: dict[str, DailyRecord]) -> None:
        """Replace all stored records with ``records`` in one transaction.

        Rows are encrypted before the table is touched, so an encryption
        failure leaves the stored state as it was.

        Raises:
            EncryptionError: If a record's values cannot be encrypted.
            RepositoryError: If the write fails; the previous state is kept.
        """
        conn = self._db.connection
        now = self._now_iso()
        rows = [
            (day, self._enc.encrypt(record.values), now)
            for day, record in records.items()
        ]
        try:
            conn.execute("DELETE FROM daily_records")
            conn.executemany(
                "INSERT INTO daily_records (record_date, values_enc, updated_at) VALUES (?, ?, ?)",
                rows,
            )
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise RepositoryError(f"Failed to save daily records: {exc}") from exc
        logger.info("Saved %d daily records", len(records))

    def count_records(self) -> int:
        """Return the number of stored dates."""
        row = self._db.connection.execute("SELECT COUNT(*) FROM daily_records").fetchone()
        return row[0]

    def _row_to_record(self, row: Any) -> DailyRecord:
        values = self._enc.decrypt(row["values_enc"]) or {}
        if not isinstance(values, dict):
            raise RepositoryError(f"Corrupt values for {row['record_date']}: expected an object")
        return DailyRecord(date=row["record_date"], values=values)
