"""
Blog API: Request Logging Middleware
====================================

What:  One access log line for every HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request ID and client IP. The level follows the status class:
       5xx → ERROR, 4xx → WARNING, otherwise INFO.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

A request that fails with an unhandled exception is logged as a 500 and the
exception is passed on; RequestIDMiddleware turns it into the response.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger("blog_api.access")

ACCESS_FORMAT = (
    "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s"
)


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log."""

    # Probed every few seconds by load balancers
    SKIPPED_PATHS = frozenset({"/health"})

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.log_access(request, 500, started)
            raise

        self.log_access(request, response.status_code, started)
        return response

    @staticmethod
    def log_access(request: Request, status: int, started: float) -> None:
        # The same fields feed the message and the record's attributes
        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": status,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(level_for_status(status), ACCESS_FORMAT, fields, extra=fields)
