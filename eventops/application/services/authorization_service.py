"""Authorization service: role-based permission checks (IAuthorizationService)."""

from __future__ import annotations

from eventops.domain.enums import ROLE_PERMISSIONS, UserRole
from eventops.domain.exceptions import AuthorizationException


class AuthorizationService:
    """Resolves permissions from the user's built-in role."""

    def __init__(
        self, role_permissions: dict[UserRole, frozenset[str]] | None = None
    ) -> None:
        self.role_permissions = role_permissions or ROLE_PERMISSIONS

    def get_role_permissions(self, role: str) -> frozenset[str]:
        """Return permission codes for the role (empty for unknown roles)."""
        try:
            return self.role_permissions.get(UserRole(role), frozenset())
        except ValueError:
            return frozenset()

    def has_permission(self, role: str, resource: str, action: str) -> bool:
        """Return True if role has resource:action or resource:* or *:*."""
        permissions = self.get_role_permissions(role)
        return (
            f"{resource}:{action}" in permissions
            or f"{resource}:*" in permissions
            or "*:*" in permissions
        )

    def require_permission(self, role: str, resource: str, action: str) -> None:
        """Raise AuthorizationException if role lacks permission."""
        if not self.has_permission(role, resource, action):
            raise AuthorizationException(resource=resource, action=action)
