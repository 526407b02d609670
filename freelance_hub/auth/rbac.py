"""Role-based scopes for the few endpoints that look beyond the caller's own data."""

from __future__ import annotations

from collections.abc import Iterable

from freelance_hub.core.exceptions import AuthorizationError
from freelance_hub.models.enums import UserRole

WILDCARD = "*"

# Clients, projects and invoices are owner-scoped and need only a valid token.
ROLE_SCOPES: dict[UserRole, frozenset[str]] = {
    UserRole.ADMIN: frozenset({WILDCARD}),
    UserRole.USER: frozenset({"users.me", "users.stats"}),
}


def get_scopes_for_role(role: str) -> frozenset[str]:
    try:
        return ROLE_SCOPES[UserRole(role.lower())]
    except ValueError:
        return frozenset()


def has_scopes(role: str, required_scopes: Iterable[str]) -> bool:
    granted = get_scopes_for_role(role)
    return WILDCARD in granted or granted.issuperset(required_scopes)


def require_scopes(role: str, required_scopes: Iterable[str]) -> None:
    """Raise ``AuthorizationError`` unless ``role`` grants every scope."""
    required = set(required_scopes)
    if has_scopes(role, required):
        return
    missing = sorted(required - get_scopes_for_role(role))
    raise AuthorizationError(f"Role {role!r} lacks scopes: {', '.join(missing)}")
