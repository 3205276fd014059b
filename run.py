"""Entry point for serving the Nonprofit API.

Runs the FastAPI application under Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``8000``); every other setting is read by ``core.config``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from nonprofit_api.app.core.config import settings
from nonprofit_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    await Server(config).serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
