"""MCP tools for recording daily habits and rendering heatmap series.

These tools are the input and rendering side of the tracker: they collect
today's values, upsert them into the record store, persist the full store,
and hand back per-discipline intensity series for a calendar heatmap.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from lifetrack.domains.habits.domain_logic.errors import TrackerError
from lifetrack.domains.habits.domain_logic.intensity import (
    INTENSITY_COLORS,
    IntensityNormalizer,
    default_window,
)
from lifetrack.domains.habits.domain_logic.record_store import normalize_date

if TYPE_CHECKING:
    from lifetrack.domains.habits.connectors import RecordPersistence
    from lifetrack.domains.habits.domain_logic.record_store import DailyRecordStore

logger = logging.getLogger(__name__)


def _error(exc: TrackerError) -> str:
    return json.dumps({
        "status": "error",
        "error_type": type(exc).__name__,
        "message": str(exc),
    })


def register_tracking_tools(
    mcp: FastMCP,
    store: DailyRecordStore,
    persistence: RecordPersistence,
) -> None:
    """Register habit tracking tools on the MCP server."""
    normalizer = IntensityNormalizer(store)
    registry = store.registry

    @mcp.tool
    async def list_disciplines(ctx: Context) -> str:
        """List the tracked disciplines in display order, with goals and units."""
        return json.dumps({
            "disciplines": [d.to_dict() for d in registry.list()],
        })

    @mcp.tool
    async def record_day(
        ctx: Context,
        values: dict[str, float],
        day: str = "",
    ) -> str:
        """Record values for a day, merging with anything already recorded.

        Args:
            values: Discipline key to raw value, e.g. {"sleeping": 7.5, "gym": 1}.
                Boolean disciplines take 1 (done) or 0 (not done).
            day: Date to record (YYYY-MM-DD). Defaults to today.
        """
        if not day:
            day = date.today().isoformat()

        try:
            record = store.upsert(day, values)
        except TrackerError as exc:
            logger.info("Rejected record_day for %s: %s", day, exc)
            return _error(exc)

        persistence.save(store.snapshot())
        logger.info("Recorded %s for %s", sorted(values), record.date)
        return json.dumps({
            "status": "saved",
            "date": record.date,
            "values": record.values,
        })

    @mcp.tool
    async def get_day(ctx: Context, day: str = "") -> str:
        """Return the values recorded for a day.

        Args:
            day: Date to look up (YYYY-MM-DD). Defaults to today.
        """
        if not day:
            day = date.today().isoformat()

        try:
            record = store.get(day)
        except TrackerError as exc:
            return _error(exc)

        if record is None:
            return json.dumps({
                "status": "not_found",
                "date": day,
                "message": "Nothing recorded for that date.",
            })
        return json.dumps({"status": "ok", "date": record.date, "values": record.values})

    @mcp.tool
    async def heatmap_series(
        ctx: Context,
        discipline: str,
        days: int = 365,
        end: str = "",
    ) -> str:
        """Build the calendar heatmap series for one discipline.

        Each entry carries an intensity from 0 (nothing) to 4 (goal reached).

        Args:
            discipline: Discipline key, e.g. 'sleeping'.
            days: Length of the trailing window in days (default: 365).
            end: Last date of the window (YYYY-MM-DD). Defaults to today.
        """
        try:
            target = registry.get(discipline)
            end_date = date.fromisoformat(normalize_date(end)) if end else date.today()
            start, stop = default_window(end_date, days)
            entries = normalizer.build_series(discipline, start=start, end=stop)
        except TrackerError as exc:
            return _error(exc)
        except ValueError as exc:
            return json.dumps({"status": "error", "error_type": "ValueError", "message": str(exc)})

        return json.dumps({
            "status": "ok",
            "discipline": target.to_dict(),
            "start": start,
            "end": stop,
            "legend": list(INTENSITY_COLORS),
            "entries": [
                {
                    **entry.to_dict(),
                    "tooltip": f"{entry.date} has {entry.raw_value} {target.unit}",
                }
                for entry in entries
            ],
        })
