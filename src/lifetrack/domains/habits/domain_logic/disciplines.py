"""Discipline registry: the read-only catalog of trackable habits.

Registration order is display order, so the registry keeps insertion order
and never reorders. A registry can be built from the built-in catalog or from
a YAML file of the form::

    disciplines:
      - key: sleeping
        label: Sleeping
        kind: numeric
        goal: 8
        unit: hrs
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from lifetrack.domains.habits.domain_logic.errors import UnknownDiscipline
from lifetrack.domains.habits.domain_logic.models import Discipline, DisciplineKind

logger = logging.getLogger(__name__)


DEFAULT_DISCIPLINES: tuple[Discipline, ...] = (
    Discipline("software", "Software Development", DisciplineKind.NUMERIC, 4, "hrs"),
    Discipline("gym", "Gym", DisciplineKind.BOOLEAN, 1, "check"),
    Discipline("piano", "Piano", DisciplineKind.NUMERIC, 1, "hrs"),
    Discipline("sleeping", "Sleeping", DisciplineKind.NUMERIC, 8, "hrs"),
    Discipline("reading", "Reading", DisciplineKind.NUMERIC, 1, "hrs"),
)


class DisciplineRegistry:
    """Ordered, immutable-after-construction index of disciplines."""

    def __init__(self, disciplines: Iterable[Discipline] = DEFAULT_DISCIPLINES) -> None:
        self._disciplines: dict[str, Discipline] = {}
        for discipline in disciplines:
            if discipline.key in self._disciplines:
                raise ValueError(f"Duplicate discipline key registered: {discipline.key!r}")
            self._disciplines[discipline.key] = discipline

    def get(self, key: str) -> Discipline:
        """Look up a discipline by key.

        Raises:
            UnknownDiscipline: If ``key`` is not registered.
        """
        try:
            return self._disciplines[key]
        except KeyError:
            raise UnknownDiscipline(key) from None

    def list(self) -> list[Discipline]:
        """Return all disciplines in registration order."""
        return list(self._disciplines.values())

    def keys(self) -> list[str]:
        return list(self._disciplines)

    def __contains__(self, key: object) -> bool:
        return key in self._disciplines

    def __len__(self) -> int:
        return len(self._disciplines)


def load_discipline_file(path: str | Path | None) -> DisciplineRegistry:
    """Build a registry from a YAML catalog, or the built-in one if no path.

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist.
        ValueError: If an entry is malformed (missing field, bad kind or goal).
    """
    if not path:
        return DisciplineRegistry()

    path = Path(path).expanduser()
    with open(path) as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    entries = data.get("disciplines", [])
    if not entries:
        raise ValueError(f"No disciplines defined in {path}")

    disciplines = []
    for entry in entries:
        try:
            disciplines.append(Discipline(
                key=str(entry["key"]),
                label=str(entry.get("label", entry["key"])),
                kind=DisciplineKind(entry.get("kind", DisciplineKind.NUMERIC.value)),
                goal=entry["goal"],
                unit=str(entry.get("unit", "")),
            ))
        except KeyError as exc:
            raise ValueError(f"Discipline entry in {path} is missing field {exc}") from exc

    registry = DisciplineRegistry(disciplines)
    logger.info("Loaded %d disciplines from %s", len(registry), path)
    return registry
