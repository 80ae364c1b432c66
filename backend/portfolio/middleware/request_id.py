"""
Portfolio API — Request ID Middleware
======================================

What:  Assigns an ID to each request and echoes it in `X-Request-ID`.
How:   Uses the client's X-Request-ID when present, otherwise a short UUID;
       stores it in a ContextVar so log lines and error handlers can quote it.
Why:   A client-supplied ID lets the admin panel and the server logs be
       correlated for one failing call; the catch-all 500 handler copies it
       back onto the error response too.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
