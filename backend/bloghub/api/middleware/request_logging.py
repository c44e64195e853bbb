"""
Request Logging Middleware

Binds a request id to the structlog context for the lifetime of a request
and logs one line per completed request.

    2024-01-15 10:30:00 [info] Request completed  method=GET path=/posts status_code=200 duration_ms=12.4 request_id=3f2a...

The request id is taken from an incoming X-Request-ID header when present,
otherwise generated, and is echoed back on the response.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from bloghub.shared.core.logging import clear_log_context, get_logger, log_context


REQUEST_ID_HEADER = "X-Request-ID"

request_logger = get_logger("bloghub.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests with method, path, status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        clear_log_context()
        log_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

            request_logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_log_context()
