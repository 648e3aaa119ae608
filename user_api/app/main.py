"""
Main entrypoint for the User API.

This module assembles the FastAPI application.  ``create_app`` reads
the settings, configures logging, builds the component graph
(database handle -> repository -> service) and hands each component
its own child of the application logger.  The database is opened when
the application starts and closed when it stops.

The application is instantiated at module import time as ``app`` so
it can be served directly::

    uvicorn user_api.app.main:app --port 3000
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.errors import register_exception_handlers
from .api.router import router as api_router
from .core.config import Settings, get_settings
from .core.db import Database
from .core.logging_config import setup_logging
from .core.middleware import setup_middleware
from .repositories.user_repository import SQLiteUserRepository
from .services.user_service import UserService


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Read from the environment when omitted.
    database : Optional[Database]
        Database handle to use.  Built from ``settings.database_url``
        when omitted.  A handle that is already connected is reused and
        the startup hook leaves it as is.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level, settings.environment)

    if database is None:
        database = Database(settings.database_url, logger=logger.getChild("db"))
    repository = SQLiteUserRepository(database, logger=logger.getChild("repository"))
    user_service = UserService(
        repository,
        logger=logger.getChild("service"),
        age_policy=settings.age_policy,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting application", extra={"environment": settings.environment})
        for variable, value in settings.defaulted():
            logger.info("%s not found in environment, using default %s", variable, value)
        logger.info("Database being used", extra={"database": database.path})
        # DatabaseStartupError propagates and aborts startup.
        database.connect()
        try:
            yield
        finally:
            database.close()
            logger.info("Application stopped")

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.user_service = user_service
    app.state.handler_logger = logger.getChild("handler")

    register_exception_handlers(app, logger.getChild("errors"))
    setup_middleware(app, logger.getChild("http"))
    app.include_router(api_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
