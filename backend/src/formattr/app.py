"""FastAPI application factory."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware

from formattr.api.routes import graphql
from formattr.core.config import Settings, configure_logging
from formattr.core.database import ping, setup_db_client
from formattr.uow import create_uow_factory

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown tasks:
    - Startup: Configure logging, create the shared MongoDB client and UoW factory
    - Shutdown: Close the client and its connection pool
    """
    settings = Settings()  # type: ignore[call-arg]

    configure_logging(settings)

    # One pooled client for the life of the process
    db_client = setup_db_client(
        settings.mongodb_url,
        max_pool_size=settings.mongodb_max_pool_size,
        timeout_ms=settings.mongodb_timeout_ms,
    )
    database = db_client[settings.mongodb_database]

    # Store in app.state for access in routes
    app.state.db_client = db_client
    app.state.uow_factory = create_uow_factory(database, settings.attributes_collection)

    logger.info(
        "application.startup",
        db_url=settings.mongodb_url.split("@")[-1],
        database=settings.mongodb_database,
        collection=settings.attributes_collection,
    )

    try:
        yield
    finally:
        logger.info("application.shutdown")
        await db_client.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = Settings()  # type: ignore[call-arg]

    app = FastAPI(
        title="Formattr Attribute API",
        description="GraphQL API for form-field attribute descriptors",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        graphql.create_router(settings.graphiql_enabled), prefix="/graphql", tags=["graphql"]
    )

    # Health check endpoint with store validation
    @app.get("/health")
    async def health_check(response: Response):
        """Health check endpoint with store connectivity test.

        Returns:
            200: {"status": "healthy"} if the store answers ping
            503: {"status": "unhealthy", "error": {...}} otherwise
        """
        try:
            await ping(app.state.db_client)

            logger.debug("health_check.success")
            return {"status": "healthy"}

        except Exception as e:
            logger.error(
                "health_check.failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return {
                "status": "unhealthy",
                "error": {
                    "type": type(e).__name__,
                    "message": str(e),
                },
            }

    return app


# Create app instance for uvicorn
app = create_app()
