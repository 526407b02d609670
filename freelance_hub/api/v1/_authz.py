"""Bearer-token guards shared by the v1 routers."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Header, HTTPException, status

from freelance_hub.auth.rbac import require_scopes
from freelance_hub.core.config import get_config
from freelance_hub.core.dependencies import CurrentUser, get_current_user
from freelance_hub.core.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

UNAUTHORIZED_DETAIL = "Invalid or missing credentials."


def _extract_bearer_token(authorization: str | None) -> str:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header must carry a Bearer token.")
    return token.strip()


def authorize(authorization: str | None, scopes: tuple[str, ...] = ()) -> CurrentUser:
    """Resolve the header to a user and check ``scopes`` against their role."""
    user = get_current_user(token=_extract_bearer_token(authorization), settings=get_config())
    if scopes:
        require_scopes(user.role, scopes)
    return user


def _reject(exc: AuthenticationError | AuthorizationError) -> HTTPException:
    logger.info("auth.rejected", extra={"event": "auth.rejected", "reason": str(exc)})
    if isinstance(exc, AuthorizationError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    # One message for every credential failure.
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def requires(*scopes: str) -> Callable[..., CurrentUser]:
    """Build a FastAPI dependency that authenticates the caller and checks ``scopes``."""

    def _dependency(authorization: str | None = Header(default=None, alias="Authorization")) -> CurrentUser:
        try:
            return authorize(authorization, scopes)
        except (AuthenticationError, AuthorizationError) as exc:
            raise _reject(exc) from exc

    return _dependency


require_user = requires()
require_admin = requires("users.list")
