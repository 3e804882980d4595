"""Auth API: login with tenant code, username and password."""

from fastapi import APIRouter, Depends, HTTPException, Request

from eventops.api.v1.dependencies import get_tenant_repo, get_user_repo
from eventops.core.limiter import limit_auth
from eventops.domain.enums import TenantStatus
from eventops.infrastructure.persistence.repositories import (
    TenantRepository,
    UserRepository,
)
from eventops.infrastructure.security.jwt import create_access_token
from eventops.schemas.auth import LoginRequest, TokenResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: UserRepository = Depends(get_user_repo),
    tenant_repo: TenantRepository = Depends(get_tenant_repo),
):
    """Authenticate with tenant_code, username, and password; return JWT."""
    tenant = await tenant_repo.get_by_code(body.tenant_code)
    if not tenant or tenant.status != TenantStatus.ACTIVE.value:
        raise HTTPException(status_code=401, detail="Invalid tenant or credentials")

    user = await user_repo.authenticate(
        tenant_id=tenant.id,
        username=body.username,
        password=body.password,
    )
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(
        data={
            "sub": user.id,
            "tenant_id": user.tenant_id,
            "username": user.username,
            "role": user.role,
        },
    )
    return TokenResponse(access_token=token, token_type="bearer")
