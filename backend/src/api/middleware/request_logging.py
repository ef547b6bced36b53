"""
Request Logging Middleware

Binds a request id to the structlog context for the lifetime of a request
and emits one access log line per response.

    request_id=3f2c... method=POST path=/api/v1/follow/7 status=201 duration_ms=4.1
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.shared.core.logging import clear_log_context, get_logger, log_context

logger = get_logger("http")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        clear_log_context()
        log_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 2)
            log_context(duration_ms=duration_ms)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", status=response.status_code)
        clear_log_context()
        return response
