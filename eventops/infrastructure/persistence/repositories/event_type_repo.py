"""Event type repository (tenant-scoped catalog)."""

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.event import EventTypeResult
from eventops.infrastructure.persistence.models.event import EventType
from eventops.infrastructure.persistence.repositories.base import BaseRepository


def _event_type_to_result(et: EventType) -> EventTypeResult:
    return EventTypeResult(
        id=et.id,
        tenant_id=et.tenant_id,
        name=et.name,
        description=et.description,
        is_active=et.is_active,
    )


class EventTypeRepository(BaseRepository[EventType]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventType)

    async def get_by_id_and_tenant(
        self, event_type_id: str, tenant_id: str
    ) -> EventTypeResult | None:
        row = await self.get_owned(event_type_id, tenant_id)
        return _event_type_to_result(row) if row else None

    async def get_by_ids(
        self, tenant_id: str, event_type_ids: Collection[str]
    ) -> list[EventTypeResult]:
        if not event_type_ids:
            return []
        result = await self.db.execute(
            select(EventType)
            .where(EventType.tenant_id == tenant_id, EventType.id.in_(list(event_type_ids)))
            .order_by(EventType.name)
        )
        return [_event_type_to_result(et) for et in result.scalars().all()]

    async def get_by_name(self, tenant_id: str, name: str) -> EventTypeResult | None:
        result = await self.db.execute(
            select(EventType).where(EventType.tenant_id == tenant_id, EventType.name == name)
        )
        row = result.scalar_one_or_none()
        return _event_type_to_result(row) if row else None

    async def list_by_tenant(
        self, tenant_id: str, include_inactive: bool = True
    ) -> list[EventTypeResult]:
        q = select(EventType).where(EventType.tenant_id == tenant_id)
        if not include_inactive:
            q = q.where(EventType.is_active.is_(True))
        result = await self.db.execute(q.order_by(EventType.name))
        return [_event_type_to_result(et) for et in result.scalars().all()]

    async def create_event_type(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> EventTypeResult:
        created = await self.create(
            EventType(
                tenant_id=tenant_id,
                name=name,
                description=description,
                is_active=is_active,
            )
        )
        return _event_type_to_result(created)
