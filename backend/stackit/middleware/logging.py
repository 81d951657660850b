"""
StackIt Backend: Request Logging Middleware
============================================

What:  One access-log line per HTTP request, with status and duration.
Why:   Slow list queries and failed submissions show up in the log with the
       request ID that ties them to the service-level log lines.
When:  Runs inside RequestIDMiddleware, so the ID is already set.

Log record extras:
    request_id, method, path, status, duration_ms, client_ip, user_id

Request bodies are never logged: question and answer text is user content.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from stackit.middleware.request_id import request_id_var, user_id_var

logger = logging.getLogger("stackit.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of each request.

    Level follows the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
    GET /health is not logged; orchestrators poll it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")
        user_id = user_id_var.get()

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            user_id,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )

        return response
