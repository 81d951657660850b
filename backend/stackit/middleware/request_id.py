"""
StackIt Backend: Request Context Middleware
============================================

What:  Binds a request ID and the caller's user id to the current request
       and returns the request ID in the X-Request-ID response header.
Why:   Every log line written while serving one request (access log, vote
       observations, notification pushes, repository errors) carries the
       same ID and the user it was served for.
How:   A client-supplied X-Request-ID is reused when it is a short token;
       anything else is replaced with a generated one, so log lines cannot
       be forged through the header. Both values live in ContextVars;
       `RequestContextFilter` copies them onto every log record.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests in one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="-")

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def resolve_request_id(supplied: str = "") -> str:
    """Return `supplied` if it is a safe token, else a fresh 8-char ID."""
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach the request ID and caller to the logging context and the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID", ""))
        # Unresolved here: an unknown id still shows up, as sent
        user_id = request.headers.get("X-User-ID") or "-"

        # Not reset afterwards: the outermost 500 handler still reads the ID
        request_id_var.set(rid)
        user_id_var.set(user_id[:64])
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response


class RequestContextFilter(logging.Filter):
    """Adds `request_id` and `user_id` to every record passing the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get() or "-"
        if not hasattr(record, "user_id"):
            record.user_id = user_id_var.get()
        return True
