"""
Portfolio API — Request Logging Middleware
===========================================

What:  One access-log line per request: method, path, status, duration,
       request ID and client IP.
How:   Runs inside RequestIDMiddleware so the ID is already set.
Why:   Access lines come from here rather than uvicorn's access log so the
       request ID and duration sit on the same line as the status.

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Never logged: request bodies (booking messages contain personal data) and
the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio.middleware.request_id import request_id_var

logger = logging.getLogger("portfolio.access")

# Probed every few seconds by the platform; not worth a log line each
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

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
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
