"""Design item type and event design item repositories."""

from collections.abc import Collection
from typing import Any

from sqlalchemy import asc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.design_item import DesignItemResult, DesignItemTypeResult
from eventops.domain.entities.design_item import DesignSchedule
from eventops.infrastructure.persistence.models.design_item import (
    DesignItem,
    DesignItemType,
)
from eventops.infrastructure.persistence.repositories.base import BaseRepository


def _type_to_result(t: DesignItemType) -> DesignItemTypeResult:
    return DesignItemTypeResult(
        id=t.id,
        tenant_id=t.tenant_id,
        name=t.name,
        description=t.description,
        type=t.type,
        category=t.category,
        default_design_days=t.default_design_days,
        default_production_days=t.default_production_days,
        default_shipping_days=t.default_shipping_days,
        client_approval_buffer_days=t.client_approval_buffer_days,
        requires_approval=t.requires_approval,
        is_active=t.is_active,
        display_order=t.display_order,
    )


def _item_to_result(i: DesignItem) -> DesignItemResult:
    return DesignItemResult(
        id=i.id,
        tenant_id=i.tenant_id,
        event_id=i.event_id,
        design_item_type_id=i.design_item_type_id,
        item_name=i.item_name,
        description=i.description,
        quantity=i.quantity,
        status=i.status,
        assigned_designer_id=i.assigned_designer_id,
        design_start_date=i.design_start_date,
        design_deadline=i.design_deadline,
        production_start_date=i.production_start_date,
        shipping_start_date=i.shipping_start_date,
        shipping_deadline=i.shipping_deadline,
        auto_created=i.auto_created,
        workflow_id=i.workflow_id,
        workflow_execution_id=i.workflow_execution_id,
        created_at=i.created_at,
    )


class DesignItemTypeRepository(BaseRepository[DesignItemType]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DesignItemType)

    async def get_by_id_and_tenant(
        self, type_id: str, tenant_id: str
    ) -> DesignItemTypeResult | None:
        row = await self.get_owned(type_id, tenant_id)
        return _type_to_result(row) if row else None

    async def list_by_tenant(
        self, tenant_id: str, include_inactive: bool = False
    ) -> list[DesignItemTypeResult]:
        q = select(DesignItemType).where(DesignItemType.tenant_id == tenant_id)
        if not include_inactive:
            q = q.where(DesignItemType.is_active.is_(True))
        result = await self.db.execute(
            q.order_by(DesignItemType.display_order, DesignItemType.name)
        )
        return [_type_to_result(t) for t in result.scalars().all()]

    async def create_type(
        self, tenant_id: str, fields: dict[str, Any]
    ) -> DesignItemTypeResult:
        created = await self.create(DesignItemType(tenant_id=tenant_id, **fields))
        return _type_to_result(created)

    async def update_type(
        self, type_id: str, tenant_id: str, fields: dict[str, Any]
    ) -> DesignItemTypeResult | None:
        row = await self.get_owned(type_id, tenant_id)
        if row is None:
            return None
        return _type_to_result(await self.apply_fields(row, fields))


class DesignItemRepository(BaseRepository[DesignItem]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DesignItem)

    async def create_design_item(
        self,
        tenant_id: str,
        *,
        event_id: str,
        design_item_type_id: str,
        item_name: str,
        description: str | None,
        quantity: int,
        status: str,
        assigned_designer_id: str | None,
        schedule: DesignSchedule,
        auto_created: bool,
        workflow_id: str | None,
    ) -> DesignItemResult:
        item = DesignItem(
            tenant_id=tenant_id,
            event_id=event_id,
            design_item_type_id=design_item_type_id,
            item_name=item_name,
            description=description,
            quantity=quantity,
            status=status,
            assigned_designer_id=assigned_designer_id,
            design_start_date=schedule.design_start_date,
            design_deadline=schedule.design_deadline,
            production_start_date=schedule.production_start_date,
            shipping_start_date=schedule.shipping_start_date,
            shipping_deadline=schedule.shipping_deadline,
            auto_created=auto_created,
            workflow_id=workflow_id,
        )
        return _item_to_result(await self.create(item))

    async def link_execution(self, item_ids: Collection[str], execution_id: str) -> None:
        if not item_ids:
            return
        await self.db.execute(
            update(DesignItem)
            .where(DesignItem.id.in_(list(item_ids)))
            .values(workflow_execution_id=execution_id)
        )

    async def list_for_event(
        self, tenant_id: str, event_id: str
    ) -> list[DesignItemResult]:
        result = await self.db.execute(
            select(DesignItem)
            .where(DesignItem.tenant_id == tenant_id, DesignItem.event_id == event_id)
            .order_by(asc(DesignItem.design_deadline).nulls_last(), asc(DesignItem.item_name))
            .execution_options(populate_existing=True)
        )
        return [_item_to_result(i) for i in result.scalars().all()]
