"""
Prometheus metrics configuration.
"""

import time
from contextlib import contextmanager
from typing import Any, Callable, Generator, cast

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_client.exposition import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

# Define metrics
REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests count", ["method", "endpoint", "status_code"])

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf")),
)

REQUEST_IN_PROGRESS = Gauge("http_requests_in_progress", "Number of HTTP requests in progress", ["method"])

EXCEPTION_COUNT = Counter(
    "http_exceptions_total", "Total HTTP exceptions count", ["method", "endpoint", "exception_type"]
)

CATEGORY_OPERATIONS = Counter(
    "category_operations_total", "Category operations by outcome", ["operation", "outcome"]
)

CATEGORY_IMAGE_FILES = Counter("category_image_files_total", "Category image files written or removed", ["action"])


def _route_template(request: Request) -> str:
    """
    Return the path of the route that handled the request
    (``/api/categories/{category_id}``) so ids stay out of the labels.
    """
    route = request.scope.get("route")
    return cast(str, getattr(route, "path", None) or "unmatched")


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware that collects Prometheus metrics for HTTP requests.
    """

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        """
        Process a request and collect metrics.
        """
        method = request.method

        # Skip metrics endpoint in metrics
        if request.url.path == "/metrics":
            response = await call_next(request)
            return cast(Response, response)

        start_time = time.time()
        REQUEST_IN_PROGRESS.labels(method=method).inc()

        try:
            response = await call_next(request)
            response_typed = cast(Response, response)

            path = _route_template(request)
            REQUEST_COUNT.labels(method=method, endpoint=path, status_code=response_typed.status_code).inc()
            REQUEST_TIME.labels(method=method, endpoint=path).observe(time.time() - start_time)

            return response_typed
        except Exception as e:
            EXCEPTION_COUNT.labels(
                method=method, endpoint=_route_template(request), exception_type=type(e).__name__
            ).inc()
            logger.exception(f"Request failed: {str(e)}")
            raise
        finally:
            REQUEST_IN_PROGRESS.labels(method=method).dec()


async def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint for exposing Prometheus metrics.
    """
    data = generate_latest(REGISTRY)
    return Response(content=data, headers={"Content-Type": CONTENT_TYPE_LATEST})


def setup_metrics(app: FastAPI) -> None:
    """
    Set up Prometheus metrics and middleware for FastAPI application.
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route("/metrics", metrics_endpoint, include_in_schema=False)

    logger.info("Prometheus metrics configured")


def record_image_file(action: str) -> None:
    """Count an image file being saved, deleted or discarded."""
    CATEGORY_IMAGE_FILES.labels(action=action).inc()


@contextmanager
def track_category_operation(operation: str) -> Generator[None, None, None]:
    """
    Count a category operation, labelled ``success`` or with the name of
    the exception that ended it.
    """
    try:
        yield
    except Exception as e:
        CATEGORY_OPERATIONS.labels(operation=operation, outcome=type(e).__name__).inc()
        raise
    CATEGORY_OPERATIONS.labels(operation=operation, outcome="success").inc()
