"""
Portfolio API — FastAPI Dependencies
=====================================

What:  Accessors for the process-wide collaborators built in the lifespan
       (identity service, media signer) and the admin gate.
How:   Collaborators live on `app.state`; handlers receive them through
       Depends() so tests can swap them by assigning different objects.
       The gate is not a Depends(): `AdminRoute` in routes/admin.py awaits
       `require_admin` before FastAPI reads the body or resolves anything.
Why:   FastAPI parses the request body ahead of every dependency, so a
       gate expressed as a dependency would let a malformed body answer
       an unauthenticated caller before the 401.
"""

import logging
from typing import Any, Dict

from fastapi import Request

from portfolio.exceptions import UnauthorizedError
from portfolio.services.auth_service import IdentityService, verify_admin
from portfolio.services.media_service import MediaSignatureService

logger = logging.getLogger(__name__)


def get_identity_service(request: Request) -> IdentityService:
    return request.app.state.identity_service


def get_media_service(request: Request) -> MediaSignatureService:
    return request.app.state.media_service


async def require_admin(request: Request) -> Dict[str, Any]:
    """
    Gate for admin routes.

    Returns the verified user and stores it on `request.state.user`.
    Raises UnauthorizedError (→ 401) when the token is missing or rejected;
    nothing else about the request has been looked at by then.
    """
    result = await verify_admin(
        request.headers.get("authorization"),
        get_identity_service(request),
    )
    if not result.authenticated:
        raise UnauthorizedError(context={"path": request.url.path})

    request.state.user = result.user
    logger.debug("Admin request by user %s", result.user.get("id"))
    return result.user
