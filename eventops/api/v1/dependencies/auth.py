"""User, role permission and auth dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.user import UserResult
from eventops.application.services.authorization_service import AuthorizationService
from eventops.infrastructure.persistence.database import get_db
from eventops.infrastructure.persistence.repositories import UserRepository
from eventops.infrastructure.security.jwt import verify_token

from . import tenant

_http_bearer = HTTPBearer(auto_error=False)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations (login, token user lookup)."""
    return UserRepository(db)


def get_authorization_service() -> AuthorizationService:
    """Role-based permission checks (built-in role table)."""
    return AuthorizationService()


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await user_repo.get_by_id_and_tenant(payload["sub"], payload["tenant_id"])
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def require_permission(resource: str, action: str):
    """Dependency factory: require JWT auth and that the user's role grants resource:action."""

    async def _require(
        current_user: Annotated[UserResult, Depends(get_current_user)],
        tenant_id: Annotated[str, Depends(tenant.get_tenant_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> UserResult:
        if current_user.tenant_id != tenant_id:
            raise HTTPException(status_code=403, detail="Forbidden")
        auth_svc.require_permission(current_user.role, resource, action)
        return current_user

    return _require
