"""
Main entrypoint for the Lab Dashboard API.

This module assembles the FastAPI application: it sets up logging,
installs the error envelope handlers and CORS, and includes the
versioned routers.  ``create_app`` builds and configures the app,
which is then instantiated at module import time as ``app`` so it can
be served directly, e.g.::

    uvicorn lab_dashboard_api.app.main:app --reload

The application title, version and API prefix come from ``Settings``
in ``core.config``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.  DEBUG only raises
    # the log level; tracebacks are never sent to callers.
    setup_logging("DEBUG" if settings.debug else settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Seeds the stores and loads (or creates) the chat snapshot.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
