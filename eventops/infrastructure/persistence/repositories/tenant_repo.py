"""Tenant repository. Returns application DTOs."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.user import TenantResult
from eventops.domain.enums import TenantStatus
from eventops.infrastructure.persistence.models.tenant import Tenant
from eventops.infrastructure.persistence.repositories.base import BaseRepository


def _tenant_to_result(t: Tenant) -> TenantResult:
    return TenantResult(id=t.id, code=t.code, name=t.name, status=t.status)


class TenantRepository(BaseRepository[Tenant]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tenant)

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:  # type: ignore[override]
        row = await super().get_by_id(tenant_id)
        return _tenant_to_result(row) if row else None

    async def get_by_code(self, code: str) -> TenantResult | None:
        result = await self.db.execute(select(Tenant).where(Tenant.code == code))
        row = result.scalar_one_or_none()
        return _tenant_to_result(row) if row else None

    async def create_tenant(
        self, code: str, name: str, status: str = TenantStatus.ACTIVE.value
    ) -> TenantResult:
        created = await self.create(Tenant(code=code, name=name, status=status))
        return _tenant_to_result(created)
