"""Life Tracker server entry point: ``python -m lifetrack.core.server.main``.

Runs over stdio for desktop MCP clients, or over streamable HTTP on a
loopback address.
"""

from __future__ import annotations

import logging
from ipaddress import ip_address

from lifetrack.core.config.settings import Settings, get_settings
from lifetrack.core.server.app import create_app

logger = logging.getLogger(__name__)


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def transport_options(settings: Settings) -> dict:
    """Return the keyword arguments for ``FastMCP.run``.

    Raises:
        RuntimeError: If HTTP would bind a non-loopback host without the
            explicit opt-in.
    """
    if settings.lifetrack_transport == "stdio":
        return {"transport": "stdio"}

    if not settings.lifetrack_allow_insecure_bind and not _is_loopback_host(settings.lifetrack_host):
        raise RuntimeError(
            f"Refusing to serve habit records on non-loopback host {settings.lifetrack_host!r}. "
            "Set LIFETRACK_ALLOW_INSECURE_BIND=true to override."
        )
    return {
        "transport": "streamable-http",
        "host": settings.lifetrack_host,
        "port": settings.lifetrack_port,
    }


def run() -> None:
    """Configure logging, build the app and serve it."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.lifetrack_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    options = transport_options(settings)
    logger.info(
        "Starting Life Tracker (%s, storage=%s)",
        options["transport"],
        settings.storage_backend,
    )
    create_app().run(**options)


if __name__ == "__main__":
    run()
