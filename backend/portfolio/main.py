"""
Portfolio API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       lifespan() builds the process-wide clients and stores them on
       app.state.
Who:   uvicorn (`uvicorn portfolio.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware:  Request ID → Logging → CORS → GZip         │
    │                                                          │
    │  Routes (/api):                                          │
    │    public:  /  /root  /projects  /projects/{id}          │
    │             /bookings                                    │
    │    admin:   /cloudinary/signature  /admin/projects[/id]  │
    │             /admin/bookings[/id]          (auth gate)    │
    │  Routes:    /health                                      │
    │                                                          │
    │  Exception handlers:                                     │
    │    Unauthorized→401  no route→404  bad body→500          │
    │    data fault→500    anything else→500                   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → DB engine → identity client
    Shutdown: identity client closed → engine disposed
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio import __version__
from portfolio.config import settings
from portfolio.database import create_engine, create_session_factory
from portfolio.exceptions import PortfolioError, RouteNotFoundError
from portfolio.middleware.cors import CORSHeadersMiddleware, apply_cors_headers
from portfolio.middleware.logging import RequestLoggingMiddleware
from portfolio.middleware.request_id import RequestIDMiddleware
from portfolio.routes import admin, health, public
from portfolio.services.auth_service import SupabaseIdentityService
from portfolio.services.media_service import MediaSignatureService

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers chatter at INFO on every call
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build and tear down the process-wide clients.

    The database engine and the identity HTTP client are created here, once,
    and handed to request handlers through app.state + Depends().
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Portfolio API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Public routes still work without these credentials
        logger.error("Configuration error: %s", str(e))

    engine = create_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.identity_service = SupabaseIdentityService.from_settings(settings)

    logger.info("API prefix: %s", settings.api_prefix or "/")
    logger.info("CORS origin(s): %s", ", ".join(settings.cors_origins_list))
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Portfolio API shutting down...")
    await app.state.identity_service.close()
    await engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


def _route_of(request: Request) -> str:
    """Request path with the API prefix removed, as shown in 404 messages."""
    path = request.url.path
    prefix = settings.api_prefix
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        path = path[len(prefix):]
    return path or "/"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map failures to `{"error": <text>}` responses.

    Handler hierarchy:
        PortfolioError            → its status_code (401 / 404 / 500)
        HTTPException 404 / 405   → 404 "Route <route> not found"
        HTTPException (other)     → its status code
        RequestValidationError    → 500 "Invalid request: ..."
        Exception (fallback)      → 500

    500 messages are the fault's own text unless EXPOSE_ERROR_DETAILS is
    off; the full fault is logged with the request ID either way.
    """

    @app.exception_handler(PortfolioError)
    async def handle_portfolio_error(request: Request, exc: PortfolioError):
        rid = _request_id(request)
        message = exc.message
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            if not settings.expose_error_details:
                message = GENERIC_ERROR_MESSAGE
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error_response(exc.status_code, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # 405 means the path exists for another method. Why 404 anyway: routes
        # match on (method, path) pairs, so an unknown pair is an unknown route
        if exc.status_code in (404, 405):
            not_found = RouteNotFoundError(route=_route_of(request))
            return _error_response(not_found.status_code, not_found.message)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        # Why 500: the error taxonomy is 401 / 404 / 500 only; a body or id
        # that cannot be used is a fault raised while handling the request
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        )
        message = f"Invalid request: {problems}"
        logger.error("[%s] %s", _request_id(request), message)
        if not settings.expose_error_details:
            message = GENERIC_ERROR_MESSAGE
        return _error_response(500, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for faults nothing else handled.

        Runs outside the middleware stack, so CORS headers are added here.
        """
        rid = _request_id(request)
        logger.error("[%s] API Error: %s", rid, str(exc), exc_info=True)
        message = str(exc) or GENERIC_ERROR_MESSAGE
        if not settings.expose_error_details:
            message = GENERIC_ERROR_MESSAGE
        response = _error_response(500, message)
        if rid:
            response.headers["X-Request-ID"] = rid
        return apply_cors_headers(response, request.headers.get("origin"))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    redirect_slashes is off: `/api/projects/` is an unmatched route, not a
    redirect to `/api/projects`.
    """
    app = FastAPI(
        title="Photographer Portfolio API",
        description="Public gallery and booking form, plus the admin panel's CRUD endpoints.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # Stateless collaborator; no connection to manage
    app.state.media_service = MediaSignatureService.from_settings(settings)

    # ── Middleware (last added = outermost) ───────────────────────────────
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Routes (registration order is match order) ────────────────────────
    prefix = settings.api_prefix
    if prefix:
        # "/api" with no trailing slash is the root route too
        app.add_api_route(prefix, public.root, methods=["GET"], include_in_schema=False)
    app.include_router(public.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)
    app.include_router(health.router)

    return app


app = create_app()
