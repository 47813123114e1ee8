"""Entry point serving the storefront API with Uvicorn.

Host and port are read from ``HOST`` and ``PORT`` (defaults ``0.0.0.0``
and ``3000``).  All other configuration is read by
``storefront_api.app.core.config`` from the environment.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from storefront_api.app.main import app


async def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Storefront stopped")
