"""Intensity normalization: raw daily values to a five-step color scale.

A positive value always lands on at least level 1 so that "something was
done" stays visibly distinct from "nothing was done". Values at or above the
goal saturate at level 4.
"""

from __future__ import annotations

import logging
import math
from datetime import date as date_type
from datetime import timedelta

from lifetrack.domains.habits.domain_logic.models import Discipline, SeriesEntry
from lifetrack.domains.habits.domain_logic.record_store import DailyRecordStore, normalize_date

logger = logging.getLogger(__name__)

MAX_INTENSITY = 4

# Legend palette, index = intensity level
INTENSITY_COLORS: tuple[str, ...] = (
    "#161b22",
    "#0e4429",
    "#006d32",
    "#26a641",
    "#39d353",
)


def intensity_for(raw_value: float | None, discipline: Discipline) -> int:
    """Map a raw value to an intensity level in ``0..MAX_INTENSITY``."""
    if raw_value is None or raw_value <= 0:
        return 0
    level = math.ceil(raw_value / discipline.goal * MAX_INTENSITY)
    return max(1, min(MAX_INTENSITY, level))


def default_window(today: date_type, days: int = 365) -> tuple[str, str]:
    """Return the inclusive ``(start, end)`` date keys of a trailing window."""
    if days < 1:
        raise ValueError(f"days must be at least 1, got {days}")
    try:
        start = today - timedelta(days=days)
    except OverflowError as exc:
        raise ValueError(f"days={days} reaches outside the supported calendar range") from exc
    return start.isoformat(), today.isoformat()


class IntensityNormalizer:
    """Builds per-discipline heatmap series from a record store.

    Series are recomputed on every call; the store holds at most a few
    hundred dates per year.
    """

    def __init__(self, store: DailyRecordStore) -> None:
        self._store = store

    def build_series(
        self,
        discipline_key: str,
        *,
        start: str | date_type | None = None,
        end: str | date_type | None = None,
    ) -> list[SeriesEntry]:
        """Return one entry per recorded date, sorted by ascending date.

        Dates with no value for the discipline are included with a raw value
        and intensity of 0. ``start`` and ``end`` are inclusive bounds.

        Raises:
            UnknownDiscipline: If ``discipline_key`` is not registered.
            InvalidValue: If a bound is not a valid date.
        """
        discipline = self._store.registry.get(discipline_key)
        lower = normalize_date(start) if start is not None else None
        upper = normalize_date(end) if end is not None else None

        entries = []
        for day in sorted(self._store.all_dates()):
            if lower is not None and day < lower:
                continue
            if upper is not None and day > upper:
                continue
            record = self._store.get(day)
            raw_value = record.values.get(discipline_key, 0) if record is not None else 0
            entries.append(SeriesEntry(
                date=day,
                intensity=intensity_for(raw_value, discipline),
                raw_value=raw_value,
            ))

        logger.debug("Built %s series with %d entries", discipline_key, len(entries))
        return entries
