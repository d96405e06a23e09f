"""Life Tracker MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from lifetrack.core.config.settings import Settings, get_settings
from lifetrack.core.storage.database import TrackerDatabase
from lifetrack.core.storage.encryption import EncryptionError, FieldEncryptor
from lifetrack.core.storage.repository import RecordRepository
from lifetrack.domains.habits.connectors import RecordPersistence
from lifetrack.domains.habits.connectors.json_file import JsonFilePersistence
from lifetrack.domains.habits.connectors.memory import InMemoryPersistence
from lifetrack.domains.habits.domain_logic.disciplines import (
    DisciplineRegistry,
    load_discipline_file,
)
from lifetrack.domains.habits.domain_logic.record_store import DailyRecordStore
from lifetrack.domains.habits.tools.tracking_tools import register_tracking_tools

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_persistence(settings: Settings) -> RecordPersistence:
    """Pick the record persistence backend from settings.

    The sqlite backend needs an encryption key; without a usable one the
    tracker falls back to in-memory storage.
    """
    if settings.storage_backend == "memory":
        return InMemoryPersistence()

    if settings.storage_backend == "json":
        return JsonFilePersistence(settings.json_path)

    if not settings.encryption_key:
        logger.warning(
            "No ENCRYPTION_KEY configured, running without persistence. "
            "Set ENCRYPTION_KEY to enable the sqlite record bank."
        )
        return InMemoryPersistence()

    try:
        encryptor = FieldEncryptor(settings.encryption_key)
    except EncryptionError as exc:
        logger.error("Failed to initialize storage: %s", exc)
        logger.warning("Continuing without persistence; records will not be stored")
        return InMemoryPersistence()

    database = TrackerDatabase(settings.db_path)
    database.initialize()
    logger.info(
        "Record bank initialized: %s (schema v%d)",
        settings.db_path,
        database.get_schema_version(),
    )
    return RecordRepository(database, encryptor)


def create_app(
    *,
    registry_override: DisciplineRegistry | None = None,
    persistence_override: RecordPersistence | None = None,
) -> FastMCP:
    """Create and configure the Life Tracker MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Loads the discipline registry
    3. Initializes record persistence and loads the record store from it
    4. Registers all tools
    """
    settings = get_settings()

    server = FastMCP(
        "Life Tracker",
        instructions=(
            "Personal daily habit tracker. Record today's values per discipline "
            "and request calendar heatmap series showing how close each day came "
            "to its goal."
        ),
    )

    if registry_override is not None:
        registry = registry_override
    else:
        registry = load_discipline_file(settings.disciplines_path)
    logger.info("Tracking %d disciplines: %s", len(registry), ", ".join(registry.keys()))

    if persistence_override is not None:
        persistence = persistence_override
    else:
        persistence = create_persistence(settings)

    store = DailyRecordStore.load(registry, persistence)

    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        status = {
            "status": "ok",
            "server": "Life Tracker",
            "version": VERSION,
            "storage_backend": persistence.backend,
            "disciplines": len(registry),
            "records_stored": len(store),
        }
        if isinstance(persistence, RecordRepository):
            status["records_persisted"] = persistence.count_records()
        return status

    register_tracking_tools(server, store, persistence)
    logger.info("Tracking tools registered (storage: %s)", persistence.backend)

    return server


# Module-level instance for FastMCP discovery ("...app.py:mcp").
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
