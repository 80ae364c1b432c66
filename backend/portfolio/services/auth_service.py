"""
Portfolio API — Identity Service & Authorization Gate
======================================================

What:  Verifies admin bearer tokens against the external identity service.
How:   `verify_admin()` extracts the token from the Authorization header and
       asks an IdentityService for the user it belongs to. The concrete
       SupabaseIdentityService calls Supabase Auth's `GET /auth/v1/user`
       with httpx.
Who:   Used by `require_admin`, which AdminRoute runs in front of every admin route.
When:  Once per admin request, before any data access.

Gate rules:
    - No Authorization header (or an empty one) → not authenticated, no I/O
    - A literal "Bearer " prefix is stripped; otherwise the raw value is the token
    - Authenticated ⇔ the identity call reported no error AND returned a user
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, Optional

import httpx

from portfolio.config import Settings
from portfolio.exceptions import IdentityServiceError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class AuthResult(NamedTuple):
    authenticated: bool
    user: Optional[Dict[str, Any]] = None


class IdentityService(ABC):
    """
    Abstract interface for the token-verifying identity provider.

    Contract:
        - get_user() returns the identity the token belongs to, or None
        - Any provider-side failure is raised as IdentityServiceError
    """

    @abstractmethod
    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Resolve a bearer token to a user object."""
        ...

    async def close(self) -> None:
        """Release network resources. Called on application shutdown."""
        return None


class SupabaseIdentityService(IdentityService):
    """
    Token verification through Supabase Auth.

    Request:
        GET {supabase_url}/auth/v1/user
        apikey: <anon key>
        Authorization: Bearer <token>

    A 200 response carries the user object; any other status means the
    token was rejected. No retries.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, config: Settings) -> "SupabaseIdentityService":
        return cls(
            base_url=config.supabase_url,
            anon_key=config.supabase_anon_key,
            timeout=config.identity_timeout_seconds,
        )

    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        if not self.base_url:
            raise IdentityServiceError("Identity service URL is not configured")

        try:
            response = await self._client.get(
                f"{self.base_url}/auth/v1/user",
                headers={
                    "apikey": self.anon_key,
                    "Authorization": f"{BEARER_PREFIX}{token}",
                },
            )
        except httpx.HTTPError as e:
            raise IdentityServiceError(
                f"Identity service request failed: {e}",
                context={"error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            raise IdentityServiceError(
                f"Identity service rejected the token (HTTP {response.status_code})",
                context={"status_code": response.status_code},
            )

        try:
            user = response.json()
        except ValueError as e:
            raise IdentityServiceError("Identity service returned invalid JSON") from e

        # Supabase answers {"id": ..., ...}; anything without an id is no user
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user

    async def close(self) -> None:
        await self._client.aclose()


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Token from an Authorization header value.

    >>> extract_bearer_token("Bearer abc")
    'abc'
    >>> extract_bearer_token("abc")
    'abc'
    >>> extract_bearer_token(None) is None
    True
    """
    if not authorization:
        return None
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return authorization


async def verify_admin(
    authorization: Optional[str],
    identity: IdentityService,
) -> AuthResult:
    """
    The authorization gate.

    Args:
        authorization: Raw `Authorization` header value (None if absent)
        identity: Provider used to resolve the token

    Returns:
        AuthResult(authenticated, user). Never raises for a bad token.
    """
    token = extract_bearer_token(authorization)
    if not token:
        return AuthResult(authenticated=False, user=None)

    try:
        user = await identity.get_user(token)
    except IdentityServiceError as e:
        logger.warning("Admin token rejected: %s", e.message)
        return AuthResult(authenticated=False, user=None)

    return AuthResult(authenticated=user is not None, user=user)
