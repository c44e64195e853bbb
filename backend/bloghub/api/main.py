"""
BlogHub API entry point.

    uvicorn bloghub.api.main:app --host 0.0.0.0 --port 8000 --reload

Request path:

    CORS → RequestLoggingMiddleware → router → handler
                                             ↳ dependencies: Database session, identity, services

The Database is built in the lifespan and hung on app.state, so importing
this module never opens a connection. Tests and scripts that need a
different database build their own Database (or override settings) before
the lifespan runs.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloghub.config.settings import settings
from bloghub.shared.db import Database
from bloghub.shared.core.logging import logger
from bloghub.api.middleware import RequestLoggingMiddleware, setup_exception_handlers
from bloghub.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "Starting BlogHub API",
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    # Fails startup if the datastore is unreachable
    database = Database.from_settings(settings)
    await database.connect()
    if settings.DATABASE_AUTO_CREATE:
        await database.create_all()
    app.state.database = database

    try:
        yield
    finally:
        await database.close()
        logger.info("BlogHub API stopped")


def create_application() -> FastAPI:
    """Build the FastAPI app: middleware, exception handlers, routes."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-user blogging platform: posts, threaded comments and likes",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Middleware added last runs first: CORS wraps request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_exception_handlers(app)
    register_routes(app)

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bloghub.api.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
