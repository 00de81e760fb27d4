"""
Restaurants API — Request ID Middleware
========================================

What:  Assigns a short correlation ID to each request and echoes it back
       in the X-Request-ID response header.
Why:   Error bodies carry the same ID, so a client report can be matched to
       the server log line for that request.

A client-supplied X-Request-ID is reused only if it is 1-64 characters of
letters, digits, '.', '_' or '-'. Anything else (spaces, control characters,
oversized values) is replaced so it cannot forge or break access-log lines.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accepted_request_id(header_value: Optional[str]) -> str:
    """Return the client's ID when it is log-safe, otherwise a fresh one."""
    if header_value and _CLIENT_ID_PATTERN.match(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accepted_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
