"""Domain enumerations (tenant lifecycle and user roles)."""

from enum import Enum


class TenantStatus(str, Enum):
    """Tenant lifecycle status.

    Only active tenants accept API traffic.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class UserRole(str, Enum):
    """Built-in user roles; permissions per role are in ROLE_PERMISSIONS."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


# Permission codes are "resource:action"; "*" matches any resource or action.
ROLE_PERMISSIONS: dict[UserRole, frozenset[str]] = {
    UserRole.ADMIN: frozenset({"*:*"}),
    UserRole.MANAGER: frozenset({
        "event:*",
        "event_type:*",
        "workflow:*",
        "task:*",
        "task_template:*",
        "design_item:*",
        "design_item_type:*",
    }),
    UserRole.STAFF: frozenset({
        "event:read",
        "event:create",
        "event_type:read",
        "workflow:read",
        "task:read",
        "task_template:read",
        "design_item:read",
        "design_item_type:read",
    }),
}
