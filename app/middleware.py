# =============================================================================
# app/middleware.py - Request Logging Middleware
# =============================================================================
# Logs one line per request with method, path, status and duration, and
# reports the duration in an X-Process-Time header. This is what `morgan`
# does in the Express version of the article.
# =============================================================================

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger("app.access")

PROCESS_TIME_HEADER = "X-Process-Time"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request after the response is produced.

    Paths in `exempt_paths` (health probes by default) are logged at DEBUG
    so load-balancer polling doesn't flood the log.
    """

    def __init__(self, app, exempt_paths: set[str] | None = None):
        super().__init__(app)
        self.exempt_paths = exempt_paths if exempt_paths is not None else {
            "/api/v1/health",
            "/api/v1/health/live",
            "/api/v1/health/ready",
        }

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        response.headers[PROCESS_TIME_HEADER] = f"{duration_ms:.2f}ms"

        level = logging.DEBUG if request.url.path in self.exempt_paths else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.2f}ms"
        )
        return response
