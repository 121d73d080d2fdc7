"""
SampleWeb Backend - Request ID Middleware
=========================================

What:  Tags each request with a short correlation ID.
How:   Reuses the client's X-Request-ID when it is a plain token, otherwise
       generates an 8-character hex ID. The ID is stored in a ContextVar
       (read by the access log and by every JSON error body) and echoed in
       the response header.
When:  Outermost application middleware.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in log lines and error bodies
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def accept_request_id(value: Optional[str]) -> str:
    """The client's ID when it is a safe token, a fresh one otherwise."""
    if value and _CLIENT_ID_PATTERN.fullmatch(value):
        return value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
