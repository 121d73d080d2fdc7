"""
SampleWeb Backend - Request Logging Middleware
==============================================

What:  One access log line per request, naming the handler that served it
       and what its result resolved to.
How:   The controller endpoint leaves `handler` and `outcome` on
       request.state; this middleware reads them back once the response is
       ready. Requests that never reach a sample handler (404, 405, /health)
       log "-" in their place.

Log levels by status:
    5xx → ERROR
    4xx → WARNING   (binding failures, missing templates)
    2xx / 3xx → INFO (renders and redirects)

Example lines:
    POST /doE 200 do_e view=result 3.4ms [1a2b3c4d]
    GET /redirect 302 redirect -> /main.home 0.8ms [5e6f7a8b]
    POST /doE 400 do_e - 1.2ms [9c0d1e2f]
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from sampleweb.middleware.request_id import request_id_var

logger = logging.getLogger("sampleweb.access")

QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its handler, outcome, status and duration."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        handler = getattr(request.state, "handler", "-")
        outcome = getattr(request.state, "outcome", "-")
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %s %s %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            handler,
            outcome,
            elapsed_ms,
            request_id_var.get(""),
            extra={"handler": handler, "outcome": outcome},
        )
        return response
