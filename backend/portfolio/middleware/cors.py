"""
Portfolio API — CORS Middleware
================================

What:  Stamps CORS headers on every response and answers every OPTIONS
       request with an empty 200.
How:   Wraps the app like the other BaseHTTPMiddleware classes; the same
       `apply_cors_headers()` helper is used by the catch-all 500 handler,
       whose responses are produced outside the middleware stack.

Differences from Starlette's CORSMiddleware:
    That middleware only adds headers when the request carries an Origin
    header, and only treats OPTIONS as a preflight when
    Access-Control-Request-Method is present. Here both are unconditional.
    Why unconditional: the admin panel and the public site are served from
    other origins, and a browser that sees an error without CORS headers
    hides the `{"error": ...}` body from the page.

Headers:
    Access-Control-Allow-Origin:      configured origin ("*" by default)
    Access-Control-Allow-Methods:     GET, POST, PUT, DELETE, OPTIONS
    Access-Control-Allow-Headers:     Content-Type, Authorization
    Access-Control-Allow-Credentials: true
"""

from typing import List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio.config import settings

ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"


def resolve_allowed_origin(origins: List[str], request_origin: Optional[str]) -> str:
    """
    Pick the Access-Control-Allow-Origin value.

    A single configured value is sent as-is. With an allowlist, the request's
    Origin is echoed when listed, otherwise the first entry is sent.
    """
    if not origins:
        return "*"
    if len(origins) == 1:
        return origins[0]
    if request_origin and request_origin in origins:
        return request_origin
    return origins[0]


def apply_cors_headers(
    response: Response,
    request_origin: Optional[str] = None,
    origins: Optional[List[str]] = None,
) -> Response:
    origins = settings.cors_origins_list if origins is None else origins
    response.headers["Access-Control-Allow-Origin"] = resolve_allowed_origin(
        origins, request_origin
    )
    response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    response.headers["Access-Control-Allow-Credentials"] = "true"
    if len(origins) > 1:
        response.headers["Vary"] = "Origin"
    return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Unconditional CORS headers plus the OPTIONS short-circuit."""

    def __init__(self, app, origins: Optional[List[str]] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.origins = settings.cors_origins_list if origins is None else origins

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")

        # Preflight for any path: no routing, no body
        if request.method == "OPTIONS":
            return apply_cors_headers(Response(status_code=200), origin, self.origins)

        response = await call_next(request)
        return apply_cors_headers(response, origin, self.origins)
