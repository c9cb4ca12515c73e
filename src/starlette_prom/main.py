"""Application entry point for the example server."""

from __future__ import annotations

import os

import uvicorn

from starlette_prom.config.settings import AppSettings


def main() -> None:
    """Start the example server."""
    server = AppSettings().server
    reload = os.getenv("STARLETTE_PROM_RELOAD", "false").lower() in ("1", "true", "yes")
    uvicorn.run(
        "starlette_prom.api.app:create_app",
        factory=True,
        host=server.host,
        port=server.port,
        reload=reload,
        log_level=server.log_level,
    )


if __name__ == "__main__":
    main()
