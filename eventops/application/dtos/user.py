"""DTOs for tenants and users (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantResult:
    id: str
    code: str
    name: str
    status: str


@dataclass(frozen=True)
class UserResult:
    """User read-model; never carries the password hash."""

    id: str
    tenant_id: str
    username: str
    email: str
    role: str
    is_active: bool
