"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Life Tracker server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; personal habit data has no auth layer in front of it.
    lifetrack_host: str = "127.0.0.1"
    lifetrack_port: int = 8011
    lifetrack_log_level: str = "info"
    lifetrack_allow_insecure_bind: bool = False
    lifetrack_transport: Literal["streamable-http", "stdio"] = "streamable-http"

    # Storage
    storage_backend: Literal["sqlite", "json", "memory"] = "json"
    db_path: str = "~/.lifetrack/tracker.db"
    json_path: str = "~/.lifetrack/life-tracker-data.json"

    # Encryption (required for the sqlite backend)
    encryption_key: str = ""

    # Discipline catalog; empty means the built-in catalog
    disciplines_path: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
