"""
API middleware components.
"""

import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Give every request an id, bind it into log records and echo it back
    in the ``X-Request-ID`` response header.

    A client supplied ``X-Request-ID`` is reused so calls can be traced
    across services.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        with logger.contextualize(request_id=request_id):
            logger.info(f"Request {request.method} {request.url.path}")
            response = await call_next(request)
            logger.info(f"Response {response.status_code} for {request.method} {request.url.path}")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
