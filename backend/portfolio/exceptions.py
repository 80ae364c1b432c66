"""
Portfolio API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the dispatcher's failure modes.
How:   Each exception carries a message and an optional context dict.
       Global handlers (registered in main.py) turn them into
       `{"error": <text>}` JSON responses with the matching status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    PortfolioError (base)                → 500
    ├── UnauthorizedError                → 401 (missing/invalid bearer token)
    ├── RouteNotFoundError               → 404 (no route matched)
    ├── IdentityServiceError             → (handled by the auth gate)
    └── DataAccessError                  → 500 (database rejected the operation)
        └── RecordNotFoundError          → 500 (lookup/update matched no row)

RecordNotFoundError is a DataAccessError: a lookup that finds
nothing is reported the same way as any other data-layer fault.
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description returned in the `error` field
        context:  Additional debug info (logged, never returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthorizedError(PortfolioError):
    """
    Raised by the authorization gate when an admin route is called without
    a verified bearer token. No data access happens after it is raised.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RouteNotFoundError(PortfolioError):
    """Raised when no (path, method) pair in the route table matches."""

    status_code = 404

    def __init__(self, route: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["route"] = route
        super().__init__(message=f"Route {route} not found", context=ctx)
        self.route = route


class IdentityServiceError(PortfolioError):
    """
    Raised by an IdentityService when token verification fails: the token
    was rejected, or the provider could not be reached. The authorization
    gate turns it into "not authenticated"; it never reaches a client.
    """

    def __init__(
        self,
        message: str = "Identity verification failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DataAccessError(PortfolioError):
    """
    Raised when a database operation fails.

    The message is the fault's own text (e.g. the driver's error string);
    whether it reaches the client is decided by `expose_error_details`.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RecordNotFoundError(DataAccessError):
    """Raised when a single-row lookup or update matches no row."""

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No {resource} found"
        if resource_id:
            message = f"No {resource} found with id '{resource_id}'"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
