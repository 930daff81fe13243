"""CLI entry point for the TMF discovery entrypoint service."""

from __future__ import annotations

import asyncio

import uvicorn

from .config import get_settings
from .logging import configure_logging
from .server import build_app


async def _run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.component_name, settings.release_name)

    app = build_app(settings)
    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_config=None)
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()
