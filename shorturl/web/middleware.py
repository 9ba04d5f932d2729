"""Access logging middleware."""

import time
import logging
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its status and latency."""

    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger('shorturl.web.access')

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        self.logger.info(
            '%s %s %s',
            request.method,
            request.url.path,
            response.status_code,
            extra={
                'method': request.method,
                'path': request.url.path,
                'status': response.status_code,
                'durationMs': duration_ms,
                'clientIp': request.client.host if request.client else None,
            },
        )
        return response
