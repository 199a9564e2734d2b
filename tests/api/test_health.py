"""
Tests for health check endpoints.
"""

import shutil

import pytest
from httpx import AsyncClient

from app.services.image_storage import ImageStorage

pytestmark = pytest.mark.asyncio


async def test_basic_health_check(client: AsyncClient) -> None:
    """
    Test the basic health check endpoint.
    """
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "version" in response.json()
    assert "environment" in response.json()


async def test_readiness_check(client: AsyncClient) -> None:
    """
    Test the readiness check endpoint.
    """
    response = await client.get("/api/health/ready")

    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "ok"
    components = {c["name"]: c for c in data["components"]}
    assert components["database"]["status"] == "healthy"
    assert components["database"]["details"]["type"] == "sqlite"
    assert components["storage"]["status"] == "healthy"


async def test_readiness_check_missing_upload_directory(client: AsyncClient, image_storage: ImageStorage) -> None:
    """
    The service is degraded when the upload directory is gone.
    """
    shutil.rmtree(image_storage.directory)

    response = await client.get("/api/health/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    components = {c["name"]: c["status"] for c in data["components"]}
    assert components["storage"] == "unhealthy"
    assert components["database"] == "healthy"
