"""Tenant-related dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.core.config import get_settings
from eventops.core.tenant_validation import is_valid_tenant_id_format
from eventops.domain.enums import TenantStatus
from eventops.infrastructure.persistence.database import get_db
from eventops.infrastructure.persistence.repositories import TenantRepository


async def get_tenant_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRepository:
    """Tenant repository for read operations."""
    return TenantRepository(db)


async def get_tenant_id(
    request: Request,
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repo)],
) -> str:
    """Resolve tenant ID from header and validate that an active tenant has it."""
    name = get_settings().tenant_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {name}",
        )
    if not is_valid_tenant_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid tenant ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    tenant = await tenant_repo.get_by_id(value)
    if not tenant or tenant.status != TenantStatus.ACTIVE.value:
        raise HTTPException(
            status_code=400,
            detail="Invalid or unknown tenant",
        )
    return value
