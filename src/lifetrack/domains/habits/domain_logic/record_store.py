"""Daily record store: owns the date -> record mapping.

All mutation goes through :meth:`DailyRecordStore.upsert`, which validates
every incoming value against the discipline registry before touching the
store. The merged record is built off to the side and swapped in with a
single assignment, so a failed upsert leaves the store exactly as it was.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import date as date_type
from datetime import datetime
from typing import TYPE_CHECKING, Any

from lifetrack.domains.habits.domain_logic.disciplines import DisciplineRegistry
from lifetrack.domains.habits.domain_logic.errors import InvalidValue
from lifetrack.domains.habits.domain_logic.models import DailyRecord, Discipline

if TYPE_CHECKING:
    from lifetrack.domains.habits.connectors import RecordPersistence

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"


def normalize_date(value: str | date_type) -> str:
    """Return the ``YYYY-MM-DD`` key for a date or ISO date string.

    Raises:
        InvalidValue: If ``value`` is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date_type):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return datetime.strptime(value, DATE_FORMAT).date().isoformat()
        except ValueError:
            pass
    raise InvalidValue("date", value, "expected a YYYY-MM-DD calendar date")


def validate_value(discipline: Discipline, value: Any) -> float:
    """Check a raw value against its discipline and return the value to store.

    Booleans are stored as 0/1. Numbers are stored as given.

    Raises:
        InvalidValue: For non-numeric or non-finite values, or boolean
            disciplines receiving anything other than 0 or 1.
    """
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, (int, float)):
        raise InvalidValue(discipline.key, value, "not a number")
    if not math.isfinite(value):
        raise InvalidValue(discipline.key, value, "not a finite number")
    if discipline.is_boolean and value not in (0, 1):
        raise InvalidValue(discipline.key, value, "boolean disciplines accept only 0 or 1")
    return value


class DailyRecordStore:
    """In-memory store of daily records, keyed by ISO date.

    Persistence is the caller's job: after a successful :meth:`upsert`, pass
    :meth:`snapshot` to the persistence collaborator's ``save``.

    Usage::

        store = DailyRecordStore(registry)
        store.upsert("2024-01-01", {"sleeping": 4})
        persistence.save(store.snapshot())
    """

    def __init__(
        self,
        registry: DisciplineRegistry,
        records: Mapping[str, DailyRecord] | None = None,
    ) -> None:
        self._registry = registry
        self._records: dict[str, DailyRecord] = {}
        for record in (records or {}).values():
            self._records[record.date] = record.copy()

    @classmethod
    def load(
        cls,
        registry: DisciplineRegistry,
        persistence: RecordPersistence,
    ) -> DailyRecordStore:
        """Build a store from persisted state, validating every value.

        Keys for disciplines that are no longer registered are dropped, as are
        null values (a cleared input saved as "not recorded").

        Raises:
            InvalidValue: If a persisted value or date is not storable.
        """
        loaded: dict[str, DailyRecord] = {}
        dropped = 0
        cleared = 0
        for raw_date, record in persistence.load().items():
            day = normalize_date(raw_date)
            values: dict[str, float] = {}
            for key, value in record.values.items():
                if key not in registry:
                    dropped += 1
                    continue
                if value is None:
                    cleared += 1
                    continue
                values[key] = validate_value(registry.get(key), value)
            loaded[day] = DailyRecord(date=day, values=values)

        if dropped:
            logger.warning("Dropped %d values for unregistered disciplines on load", dropped)
        if cleared:
            logger.warning("Dropped %d null values on load", cleared)
        logger.info("Loaded %d daily records", len(loaded))
        return cls(registry, loaded)

    @property
    def registry(self) -> DisciplineRegistry:
        return self._registry

    def upsert(self, date: str | date_type, partial_values: Mapping[str, Any]) -> DailyRecord:
        """Merge ``partial_values`` into the record for ``date``.

        Keys present in ``partial_values`` overwrite; keys absent are left
        untouched. The record is created if it does not exist.

        Returns:
            A copy of the merged record.

        Raises:
            UnknownDiscipline: If any key is not registered.
            InvalidValue: If the date or any value is rejected.
        """
        day = normalize_date(date)

        validated: dict[str, float] = {}
        for key, value in partial_values.items():
            discipline = self._registry.get(key)
            validated[key] = validate_value(discipline, value)

        existing = self._records.get(day)
        merged = dict(existing.values) if existing is not None else {}
        for key, value in validated.items():
            merged[key] = value

        record = DailyRecord(date=day, values=merged)
        self._records[day] = record
        logger.debug("Upserted %s: %s", day, sorted(validated))
        return record.copy()

    def get(self, date: str | date_type) -> DailyRecord | None:
        """Return a copy of the record for ``date``, or None."""
        record = self._records.get(normalize_date(date))
        return record.copy() if record is not None else None

    def all_dates(self) -> list[str]:
        """Return every recorded date, in insertion order (not sorted)."""
        return list(self._records)

    def snapshot(self) -> dict[str, DailyRecord]:
        """Return a deep copy of the whole store for persistence."""
        return {day: record.copy() for day, record in self._records.items()}

    def __contains__(self, date: object) -> bool:
        try:
            return normalize_date(date) in self._records
        except InvalidValue:
            return False

    def __len__(self) -> int:
        return len(self._records)
