"""JSON file record persistence.

The file holds one object keyed by date, each value mapping discipline key
to raw value::

    {"2024-01-01": {"sleeping": 4, "gym": 1}}

Saves write a sibling temp file and rename it over the target, so an
interrupted save leaves the previous file intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from lifetrack.domains.habits.connectors import PersistenceError
from lifetrack.domains.habits.domain_logic.models import DailyRecord

logger = logging.getLogger(__name__)


class JsonFilePersistence:
    """RecordPersistence backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backend(self) -> str:
        return "json"

    def load(self) -> dict[str, DailyRecord]:
        """Read all records. A missing file means no records yet.

        Raises:
            PersistenceError: If the file is unreadable or not the expected shape.
        """
        if not self._path.exists():
            logger.info("No record file at %s, starting empty", self._path)
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data: Any = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Failed to read records from {self._path}: {exc}") from exc

        if not isinstance(data, dict):
            raise PersistenceError(f"Expected a JSON object in {self._path}")

        records: dict[str, DailyRecord] = {}
        for day, values in data.items():
            if not isinstance(values, dict):
                raise PersistenceError(f"Record for {day!r} in {self._path} is not an object")
            records[day] = DailyRecord(date=day, values=dict(values))
        return records

    def save(self, records: dict[str, DailyRecord]) -> None:
        """Replace the file with ``records``.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        payload = {day: record.values for day, record in records.items()}
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write records to {self._path}: {exc}") from exc

        logger.info("Saved %d daily records to %s", len(records), self._path)
