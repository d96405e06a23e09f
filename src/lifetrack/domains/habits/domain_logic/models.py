"""Data models for disciplines, daily records and heatmap series."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DisciplineKind(str, Enum):
    """How a discipline is measured."""

    NUMERIC = "numeric"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Discipline:
    """A trackable habit with the goal that maps to full intensity."""

    key: str
    label: str
    kind: DisciplineKind
    goal: float
    unit: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Discipline key must not be empty")
        if not isinstance(self.kind, DisciplineKind):
            object.__setattr__(self, "kind", DisciplineKind(self.kind))
        if isinstance(self.goal, bool) or not isinstance(self.goal, (int, float)):
            raise ValueError(f"Goal for {self.key!r} must be a number, got {self.goal!r}")
        if not math.isfinite(self.goal) or self.goal <= 0:
            raise ValueError(f"Goal for {self.key!r} must be a positive number, got {self.goal!r}")

    @property
    def is_boolean(self) -> bool:
        return self.kind is DisciplineKind.BOOLEAN

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "kind": self.kind.value,
            "goal": self.goal,
            "unit": self.unit,
        }


@dataclass
class DailyRecord:
    """Raw values recorded for one calendar date.

    ``date`` is the ISO ``YYYY-MM-DD`` key. A discipline missing from
    ``values`` was not recorded that day, which is distinct from a recorded 0.
    """

    date: str
    values: dict[str, float] = field(default_factory=dict)

    def copy(self) -> DailyRecord:
        return DailyRecord(date=self.date, values=dict(self.values))


@dataclass(frozen=True)
class SeriesEntry:
    """One heatmap cell: a recorded date and its normalized intensity."""

    date: str
    intensity: int
    raw_value: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "intensity": self.intensity,
            "raw_value": self.raw_value,
        }
