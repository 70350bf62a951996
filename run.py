"""Entry point for the Lab Dashboard API server.

Starts the FastAPI application with Uvicorn.  Host and port are read
from the environment variables ``HOST`` and ``PORT`` (defaults
``0.0.0.0`` and ``8000``); everything else is configured through the
variables documented in ``lab_dashboard_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from lab_dashboard_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
