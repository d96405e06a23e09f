"""Errors raised by the habit tracking core.

Both errors are caller contract violations: the operation that raised them
did not change any state.
"""

from __future__ import annotations

from typing import Any


class TrackerError(Exception):
    """Base class for habit tracker contract violations."""


class UnknownDiscipline(TrackerError):
    """Raised when a discipline key is not in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown discipline: {key!r}")
        self.key = key


class InvalidValue(TrackerError):
    """Raised when a raw value (or date key) cannot be stored."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid value for {key!r}: {value!r} ({reason})")
        self.key = key
        self.value = value
        self.reason = reason
