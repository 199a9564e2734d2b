"""
Health check endpoint.
"""

import os
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db_session, get_image_storage
from app.core.config import settings
from app.services.image_storage import ImageStorage

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status model."""

    status: str
    version: str
    environment: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "ok", "version": "1.0.0", "environment": "development"}}
    )


class ComponentStatus(BaseModel):
    """Component health status model."""

    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status model with component status information."""

    components: List[ComponentStatus]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "ok",
                "version": "1.0.0",
                "environment": "development",
                "components": [
                    {"name": "database", "status": "healthy", "details": {"type": "postgresql"}},
                    {"name": "storage", "status": "healthy", "details": {"path": "uploads/method-icons"}},
                ],
            }
        }
    )


@router.get(
    "",
    response_model=HealthStatus,
    summary="Basic health check endpoint",
    responses={200: {"description": "Service is healthy"}},
)
async def health_check() -> HealthStatus:
    """
    Basic health check endpoint.

    Returns a simple status indicating the service is running, along with version
    and environment information.
    """
    return HealthStatus(
        status="ok",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
    )


@router.get(
    "/ready",
    response_model=DetailedHealthStatus,
    summary="Readiness check endpoint",
    responses={200: {"description": "Service is ready"}, 503: {"description": "Service is not ready"}},
)
async def readiness_check(
    response: Response,
    db_session: AsyncSession = Depends(get_db_session),
    images: ImageStorage = Depends(get_image_storage),
) -> DetailedHealthStatus:
    """
    Check the database and the image upload directory.
    """
    components = []
    all_healthy = True

    try:
        await db_session.execute(text("SELECT 1"))
        backend = db_session.bind.dialect.name if db_session.bind else "unknown"
        components.append(ComponentStatus(name="database", status="healthy", details={"type": backend}))
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        components.append(ComponentStatus(name="database", status="unhealthy", details={"error": str(e)}))
        all_healthy = False

    directory = images.directory
    if directory.is_dir() and os.access(directory, os.W_OK):
        components.append(ComponentStatus(name="storage", status="healthy", details={"path": str(directory)}))
    else:
        logger.error(f"Upload directory {directory} is missing or not writable")
        components.append(
            ComponentStatus(name="storage", status="unhealthy", details={"error": f"{directory} not writable"})
        )
        all_healthy = False

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return DetailedHealthStatus(
        status="ok" if all_healthy else "degraded",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        components=components,
    )
