import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from app.core.metrics import record_image_file, track_category_operation


def sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_track_category_operation_success():
    labels = {"operation": "test-op", "outcome": "success"}
    before = sample("category_operations_total", labels)

    with track_category_operation("test-op"):
        pass

    assert sample("category_operations_total", labels) == before + 1


def test_track_category_operation_failure():
    labels = {"operation": "test-op", "outcome": "KeyError"}
    before = sample("category_operations_total", labels)

    with pytest.raises(KeyError):
        with track_category_operation("test-op"):
            raise KeyError("missing")

    assert sample("category_operations_total", labels) == before + 1


def test_record_image_file():
    before = sample("category_image_files_total", {"action": "saved"})

    record_image_file("saved")

    assert sample("category_image_files_total", {"action": "saved"}) == before + 1


@pytest.mark.asyncio
async def test_metrics_endpoint_uses_route_templates(client: AsyncClient):
    await client.get("/api/categories/some-id")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'endpoint="/api/categories/{category_id}"' in response.text
    assert "some-id" not in response.text


@pytest.mark.asyncio
async def test_unknown_paths_share_one_label(client: AsyncClient):
    labels = {"method": "GET", "endpoint": "unmatched", "status_code": "404"}
    before = sample("http_requests_total", labels)

    await client.get("/no/such/path-123")

    assert sample("http_requests_total", labels) == before + 1
    assert sample("http_requests_total", {**labels, "endpoint": "/no/such/path-123"}) == 0.0
