"""Record persistence connectors: where the daily record store lives between runs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lifetrack.domains.habits.domain_logic.models import DailyRecord


class PersistenceError(Exception):
    """Raised when persisted records cannot be read or written."""


@runtime_checkable
class RecordPersistence(Protocol):
    """Load/save interface for the full date -> record mapping.

    Implementations must round-trip: ``load()`` after ``save(records)``
    returns a mapping equal to ``records``.
    """

    def load(self) -> dict[str, DailyRecord]:
        """Return all stored records, or an empty mapping if none exist."""
        ...

    def save(self, records: dict[str, DailyRecord]) -> None:
        """Replace the stored state with ``records``."""
        ...

    @property
    def backend(self) -> str:
        """Label for the backend: 'memory', 'json', or 'sqlite'."""
        ...
