"""Entry point for the User API.

Reads configuration from the environment (see
``user_api.app.core.config``), opens the database and serves the
application with Uvicorn.  Failing to open the database is fatal: the
error is logged and the process exits before accepting traffic.

Configuration such as ``DATABASE_URL``, ``PORT`` and ``ENVIRONMENT``
is taken from the environment; when running in Docker pass them with
``--env-file``.

Usage:
    python run.py
"""
import asyncio
import sys

from uvicorn import Config, Server

from user_api.app.core.config import get_settings
from user_api.app.core.db import Database
from user_api.app.core.exceptions import DatabaseStartupError
from user_api.app.core.logging_config import setup_logging, uvicorn_log_level
from user_api.app.main import create_app


async def serve() -> int:
    settings = get_settings()
    logger = setup_logging(settings.log_level, settings.environment)

    database = Database(settings.database_url, logger=logger.getChild("db"))
    try:
        database.connect()
    except DatabaseStartupError:
        logger.critical("Unable to connect to database", exc_info=True)
        return 1

    app = create_app(settings=settings, database=database)
    logger.info("Server is starting", extra={"host": settings.host, "port": settings.port})
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=uvicorn_log_level(settings.log_level),
    )
    server = Server(config)
    await server.serve()
    return 0


def main() -> int:
    try:
        return asyncio.run(serve())
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
