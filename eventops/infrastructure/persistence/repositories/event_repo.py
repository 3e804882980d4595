"""Event repository. Returns application DTOs."""

from collections.abc import Collection
from datetime import date

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.event import EventCreate, EventResult
from eventops.infrastructure.persistence.models.event import Event
from eventops.infrastructure.persistence.repositories.base import BaseRepository


def _event_to_result(e: Event) -> EventResult:
    """Map ORM Event to application EventResult."""
    return EventResult(
        id=e.id,
        tenant_id=e.tenant_id,
        event_type_id=e.event_type_id,
        title=e.title,
        status=e.status,
        start_date=e.start_date,
        end_date=e.end_date,
        account_id=e.account_id,
        contact_id=e.contact_id,
        location=e.location,
        details=dict(e.details or {}),
        created_by=e.created_by,
        created_at=e.created_at,
    )


class EventRepository(BaseRepository[Event]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Event)

    async def get_by_id_and_tenant(
        self, event_id: str, tenant_id: str
    ) -> EventResult | None:
        row = await self.get_owned(event_id, tenant_id)
        return _event_to_result(row) if row else None

    async def create_event(
        self, tenant_id: str, data: EventCreate, created_by: str | None
    ) -> EventResult:
        event = Event(
            tenant_id=tenant_id,
            event_type_id=data.event_type_id,
            title=data.title,
            status=data.status,
            start_date=data.start_date,
            end_date=data.end_date,
            account_id=data.account_id,
            contact_id=data.contact_id,
            location=data.location,
            details=dict(data.details),
            created_by=created_by,
        )
        created = await self.create(event)
        return _event_to_result(created)

    async def list_by_tenant(
        self,
        tenant_id: str,
        skip: int = 0,
        limit: int = 100,
        event_type_id: str | None = None,
    ) -> list[EventResult]:
        q = select(Event).where(Event.tenant_id == tenant_id)
        if event_type_id:
            q = q.where(Event.event_type_id == event_type_id)
        q = (
            q.order_by(asc(Event.start_date).nulls_last(), asc(Event.id))
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(q)
        return [_event_to_result(e) for e in result.scalars().all()]

    async def get_upcoming_by_types(
        self, tenant_id: str, event_type_ids: Collection[str], from_date: date
    ) -> list[EventResult]:
        if not event_type_ids:
            return []
        result = await self.db.execute(
            select(Event)
            .where(
                Event.tenant_id == tenant_id,
                Event.event_type_id.in_(list(event_type_ids)),
                Event.start_date >= from_date,
            )
            .order_by(asc(Event.start_date), asc(Event.id))
        )
        return [_event_to_result(e) for e in result.scalars().all()]
