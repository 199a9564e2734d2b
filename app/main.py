"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from app.api.errors import register_exception_handlers
from app.api.middleware import RequestContextMiddleware
from app.api.responses import Tags
from app.api.routes.v1.categories import router as categories_router
from app.api.routes.v1.endpoints.health import router as health_router
from app.core.config import settings
from app.core.events import close_resources, open_resources
from app.core.logging import configure_logging
from app.core.metrics import setup_metrics
from app.core.tracing import setup_tracing
from app.db.session import Database
from app.services.image_storage import ImageStorage


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan event handler for startup and shutdown events.
    """
    if settings.SENTRY_DSN:
        sentry_logging = LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[
                FastApiIntegration(),
                sentry_logging,
            ],
            environment=settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            release=f"{settings.PROJECT_NAME}@{settings.VERSION}",
        )
        logger.info("Sentry initialized")

    await open_resources(app)
    yield
    await close_resources(app)


def create_application(
    database: Optional[Database] = None,
    image_storage: Optional[ImageStorage] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Category store handle; built from settings when omitted
        image_storage: Upload directory handle; built from settings when omitted
    """
    configure_logging()

    is_production = settings.ENVIRONMENT == "production"
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
        openapi_url=None if is_production else "/api/openapi.json",
        lifespan=lifespan,
        openapi_tags=[
            {"name": Tags.HEALTH, "description": "Health check and readiness endpoints"},
            {"name": Tags.CATEGORIES, "description": "Category management endpoints"},
        ],
    )

    application.state.database = database or Database(echo=settings.DEBUG)
    application.state.image_storage = image_storage or ImageStorage()

    register_exception_handlers(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.CORS_ORIGINS_STR == "*" else settings.CORS_ORIGINS_STR.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestContextMiddleware)

    if settings.ENABLE_METRICS:
        setup_metrics(application)
        logger.info("Prometheus metrics enabled")

    if settings.ENABLE_TRACING:
        setup_tracing(application, application.state.database.engine)
        logger.info("OpenTelemetry tracing enabled")

    application.include_router(health_router, prefix=f"{settings.API_PREFIX}/health", tags=[Tags.HEALTH])
    application.include_router(categories_router, prefix=settings.CATEGORIES_PREFIX)

    # Serve stored images at the web paths persisted on each category
    upload_root = application.state.image_storage.directory.parent
    application.mount(
        settings.UPLOAD_URL,
        StaticFiles(directory=upload_root, check_dir=False),
        name="uploads",
    )

    return application


app = create_application()
