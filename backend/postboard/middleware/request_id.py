"""
Postboard Backend — Request ID Middleware
===========================================

What:  Gives every request a correlation ID and returns it in X-Request-ID.
How:   A client-supplied X-Request-ID is reused only if it is a short token
       of letters, digits, '.', '_' or '-'; anything else is replaced by a
       fresh 8-character hex ID, so log lines never carry arbitrary header
       text. The ID lives in a ContextVar for loggers and error handlers.
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


def resolve_request_id(supplied: Optional[str]) -> str:
    """The client's ID if it is an acceptable token, otherwise a new one."""
    if supplied and _CLIENT_ID_PATTERN.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags the request, its log lines and its response with one correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers.setdefault(REQUEST_ID_HEADER, rid)
        return response
