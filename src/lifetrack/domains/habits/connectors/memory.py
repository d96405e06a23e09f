"""In-memory record persistence: nothing survives the process."""

from __future__ import annotations

from lifetrack.domains.habits.domain_logic.models import DailyRecord


class InMemoryPersistence:
    """RecordPersistence that keeps a private copy of the last saved state.

    ``save_count`` counts calls to :meth:`save`, which tests use to check
    that callers persist after each mutation.
    """

    def __init__(self, records: dict[str, DailyRecord] | None = None) -> None:
        self._records = {day: record.copy() for day, record in (records or {}).items()}
        self.save_count = 0

    def load(self) -> dict[str, DailyRecord]:
        return {day: record.copy() for day, record in self._records.items()}

    def save(self, records: dict[str, DailyRecord]) -> None:
        self._records = {day: record.copy() for day, record in records.items()}
        self.save_count += 1

    @property
    def backend(self) -> str:
        return "memory"
