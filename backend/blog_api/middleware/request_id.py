"""
Blog API: Request ID Middleware
===============================

What:  Tags every request with an ID and echoes it in X-Request-ID.
How:   Reuses the client's X-Request-ID header when present, otherwise a short
       UUID; stores it in a ContextVar for loggers and in request.state for
       handlers.
When:  Outermost of the project's middleware.

Errors that no exception handler claimed are turned into the generic 500
envelope here. Starlette would otherwise answer them from
ServerErrorMiddleware, outside this middleware, and the response would go
out untagged.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.exceptions import ServerError
from blog_api.responses import error_response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    # 8 chars is enough to correlate log lines within one deployment
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and guarantees every response carries it."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        request_id_var.set(request_id)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "[%s] Unhandled error on %s %s", request_id, request.method, request.url.path
            )
            error = ServerError()
            response = error_response(error.status_code, error.message)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
